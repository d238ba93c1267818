from typing import Any, Dict, Optional

from creator_leads.errors import NotFoundError
from creator_leads.models.lead import Lead
from creator_leads.services.lead_repository import LeadRepository, parse_id
from creator_leads.services.lifecycle_service import LEAD_NOT_FOUND
from creator_leads.services.validation import validate_message
from creator_leads.utils.log import get_logger

logger = get_logger(__name__)


class ConversationManager:
    """Append-only message threads. Messages are never edited, reordered or deleted."""

    def __init__(self, repository: LeadRepository):
        self.repository = repository

    def append_message(
        self,
        owner_id: str,
        lead_id: Any,
        sender: Any,
        content: Any,
        template_id: Optional[Any] = None,
    ) -> Lead:
        """
        Append a message to the lead's thread and refresh its lastActivity.

        Influencer messages are outbound and start read; brand messages are
        inbound and start unread. The flag is never changed afterwards.

        Raises:
            ValidationError: empty content or unknown sender
            NotFoundError: lead missing or owned by another account
        """
        validate_message(sender, content)
        lead = self.repository.append_message(
            owner_id,
            lead_id,
            sender=sender,
            content=content,
            is_read=(sender == "influencer"),
            template_id=parse_id(template_id) if template_id else None,
        )
        if not lead:
            raise NotFoundError(LEAD_NOT_FOUND)
        logger.info("Message from %s appended to lead %s for account %s", sender, lead.id, owner_id)
        return lead

    def respond(self, owner_id: str, lead_id: Any, text: Any, template_id: Optional[Any] = None) -> Lead:
        # text is expected to be rendered already; the template id is kept for traceability only
        return self.append_message(owner_id, lead_id, "influencer", text, template_id=template_id)

    def summarize(self, owner_id: str, lead_id: Any) -> Dict[str, int]:
        """Counts over the lead's thread."""
        lead = self.repository.get(owner_id, lead_id)
        if not lead:
            raise NotFoundError(LEAD_NOT_FOUND)
        messages = lead.messages
        return {
            "total": len(messages),
            "brand": sum(1 for m in messages if m.sender == "brand"),
            "influencer": sum(1 for m in messages if m.sender == "influencer"),
            "unread": sum(1 for m in messages if not m.is_read),
        }
