"""
Lead lifecycle: creation, status transitions, field updates and deletion.

Transitions are permissive: any of the five statuses may move to any other,
and accepted/rejected are not terminal.
"""

from typing import Any, Dict, List, Optional

from creator_leads.errors import NotFoundError
from creator_leads.models.lead import Lead
from creator_leads.services.lead_repository import LeadRepository
from creator_leads.services.validation import validate_lead_patch, validate_new_lead, validate_status
from creator_leads.utils.log import get_logger

logger = get_logger(__name__)

LEAD_NOT_FOUND = "Lead not found"


class LeadLifecycleManager:
    def __init__(self, repository: LeadRepository):
        self.repository = repository

    def create_lead(self, owner_id: str, fields: Dict[str, Any]) -> Lead:
        """
        Create a lead in status ``new`` with an empty thread.

        Raises:
            ValidationError: a required field is missing/empty or an optional one is malformed
        """
        cleaned = validate_new_lead(fields)
        lead = self.repository.create(owner_id, cleaned)
        logger.info("Lead %s created for account %s", lead.id, owner_id)
        return lead

    def get_lead(self, owner_id: str, lead_id: Any) -> Lead:
        lead = self.repository.get(owner_id, lead_id)
        if not lead:
            logger.debug("Lead %s not found for account %s", lead_id, owner_id)
            raise NotFoundError(LEAD_NOT_FOUND)
        return lead

    def list_leads(self, owner_id: str, status: Optional[str] = None, search: Optional[str] = None) -> List[Lead]:
        if status:
            status = validate_status(status)
        search = search.strip() if search else None
        leads = self.repository.list_all(owner_id, status=status, search=search)
        logger.debug("Found %d leads for account %s", len(leads), owner_id)
        return leads

    def set_status(self, owner_id: str, lead_id: Any, new_status: Any) -> Lead:
        status = validate_status(new_status)
        lead = self.repository.update(owner_id, lead_id, {"status": status})
        if not lead:
            raise NotFoundError(LEAD_NOT_FOUND)
        logger.info("Lead %s status set to %s for account %s", lead.id, status, owner_id)
        return lead

    def update_fields(self, owner_id: str, lead_id: Any, partial: Dict[str, Any]) -> Lead:
        cleaned = validate_lead_patch(partial)
        lead = self.repository.update(owner_id, lead_id, cleaned)
        if not lead:
            raise NotFoundError(LEAD_NOT_FOUND)
        logger.info("Lead %s updated for account %s (%s)", lead.id, owner_id, ", ".join(sorted(cleaned)) or "touch")
        return lead

    def delete_lead(self, owner_id: str, lead_id: Any) -> None:
        if not self.repository.delete(owner_id, lead_id):
            raise NotFoundError(LEAD_NOT_FOUND)
        logger.info("Lead %s deleted for account %s", lead_id, owner_id)
