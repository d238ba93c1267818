"""
Reusable response templates.

``variables`` is derived from ``content`` on every write and is never taken
from the caller.
"""

import re
from contextlib import contextmanager
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creator_leads.errors import NotFoundError, PersistenceError
from creator_leads.models.db import utcnow
from creator_leads.models.template import Template
from creator_leads.services.lead_repository import parse_id
from creator_leads.services.validation import validate_new_template, validate_template_patch
from creator_leads.utils.log import get_logger

logger = get_logger(__name__)

TEMPLATE_NOT_FOUND = "Template not found"

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

DEFAULT_TEMPLATES = [
    {
        "name": "Initial Interest Response",
        "category": "initial",
        "content": "Hi {{brand_name}}! Thank you for reaching out. I'm interested in learning more about this "
                   "collaboration opportunity. Could you please share more details about the campaign "
                   "requirements and timeline?",
    },
    {
        "name": "Rate Card Request",
        "category": "qualifying",
        "content": "Thank you for your interest in collaborating with me! I'd love to work with {{brand_name}}. "
                   "Please find my rate card attached. For {{collaboration_type}}, my rate is typically in the "
                   "range mentioned. Let me know if you'd like to discuss further! {rate_card}",
    },
    {
        "name": "Counter Offer",
        "category": "negotiation",
        "content": "Hi {{brand_name}}, thank you for the offer! I'm very interested in this collaboration. "
                   "Based on the scope of work and deliverables, I would like to propose a rate of "
                   "{{proposed_rate}}. This includes {{deliverables}}. Looking forward to your response!",
    },
    {
        "name": "Collaboration Acceptance",
        "category": "acceptance",
        "content": "Hi {{brand_name}}! I'm excited to confirm our collaboration for {{collaboration_type}}. "
                   "I accept the terms discussed and look forward to creating amazing content for your brand. "
                   "When would you like to schedule a brief call to discuss the next steps?",
    },
    {
        "name": "Polite Decline",
        "category": "decline",
        "content": "Hi {{brand_name}}, thank you for thinking of me for this collaboration opportunity. "
                   "Unfortunately, this doesn't align with my current content strategy and brand partnerships. "
                   "I appreciate your interest and wish you the best with your campaign!",
    },
]


def extract_variables(content: str) -> List[str]:
    """Distinct {{name}} placeholders in first-appearance order."""
    seen: List[str] = []
    for match in VARIABLE_PATTERN.finditer(content or ""):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen


class TemplateStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _unit_of_work(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise PersistenceError(str(e)) from e

    def _find(self, template_id: Any) -> Template:
        tid = parse_id(template_id)
        template = self.db.query(Template).filter(Template.id == tid).first() if tid else None
        if not template:
            raise NotFoundError(TEMPLATE_NOT_FOUND)
        return template

    def list_templates(self) -> List[Template]:
        with self._unit_of_work("list templates"):
            return self.db.query(Template).order_by(Template.created_at.asc(), Template.name.asc()).all()

    def get(self, template_id: Any) -> Template:
        with self._unit_of_work("fetch template"):
            return self._find(template_id)

    def create(self, fields: Dict[str, Any]) -> Template:
        cleaned = validate_new_template(fields)
        with self._unit_of_work("create template"):
            now = utcnow()
            template = Template(
                variables=extract_variables(cleaned["content"]),
                created_at=now,
                updated_at=now,
                **cleaned,
            )
            self.db.add(template)
            self.db.commit()
            self.db.refresh(template)
        logger.info("Template %s created (%s)", template.id, template.category)
        return template

    def update(self, template_id: Any, partial: Dict[str, Any]) -> Template:
        cleaned = validate_template_patch(partial)
        with self._unit_of_work("update template"):
            template = self._find(template_id)
            for key, value in cleaned.items():
                setattr(template, key, value)
            if "content" in cleaned:
                template.variables = extract_variables(cleaned["content"])
            self.db.commit()
            self.db.refresh(template)
        logger.info("Template %s updated", template.id)
        return template

    def delete(self, template_id: Any) -> None:
        with self._unit_of_work("delete template"):
            template = self._find(template_id)
            self.db.delete(template)
            self.db.commit()
        logger.info("Template %s deleted", template_id)

    def seed_defaults(self) -> int:
        """Insert the stock templates when none exist. Returns how many were added."""
        with self._unit_of_work("seed templates"):
            if self.db.query(Template.id).first() is not None:
                return 0
            now = utcnow()
            for data in DEFAULT_TEMPLATES:
                self.db.add(Template(
                    variables=extract_variables(data["content"]),
                    created_at=now,
                    updated_at=now,
                    **data,
                ))
            self.db.commit()
        logger.info("Seeded %d default templates", len(DEFAULT_TEMPLATES))
        return len(DEFAULT_TEMPLATES)
