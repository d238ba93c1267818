"""
Owner-scoped persistence for leads and their message threads.

Every query filters on the owning account, so a lead belonging to another
account is indistinguishable from one that does not exist. Each mutation is a
single unit of work: lock the owned row, mutate, commit. Storage failures roll
the session back and surface as PersistenceError.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creator_leads.errors import PersistenceError
from creator_leads.models.db import utcnow
from creator_leads.models.lead import Lead
from creator_leads.models.message import Message
from creator_leads.utils.log import get_logger

logger = get_logger(__name__)


def parse_id(value: Any) -> Optional[uuid.UUID]:
    """Coerce an id from a path or payload; malformed ids map to None."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def _next_activity(lead: Lead):
    # lastActivity never moves backwards, even under clock skew
    now = utcnow()
    if lead.last_activity is not None and lead.last_activity > now:
        return lead.last_activity
    return now


class LeadRepository:
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

    def _owned(self, owner_id: str, lead_id: Any, for_update: bool = False) -> Optional[Lead]:
        lid = parse_id(lead_id)
        if lid is None or not owner_id:
            return None
        query = self.db.query(Lead).filter(Lead.id == lid, Lead.owner_id == owner_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def create(self, owner_id: str, fields: Dict[str, Any]) -> Lead:
        with self._unit_of_work("create lead"):
            now = utcnow()
            lead = Lead(
                owner_id=owner_id,
                status="new",
                last_activity=now,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self.db.add(lead)
            self.db.commit()
            self.db.refresh(lead)
            return lead

    def get(self, owner_id: str, lead_id: Any) -> Optional[Lead]:
        with self._unit_of_work("fetch lead"):
            return self._owned(owner_id, lead_id)

    def list_all(
        self,
        owner_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Lead]:
        """All leads owned by the account, most recently active first."""
        with self._unit_of_work("list leads"):
            query = self.db.query(Lead).filter(Lead.owner_id == owner_id)
            if status:
                query = query.filter(Lead.status == status)
            if search:
                term = search.lower()
                query = query.filter(or_(
                    func.lower(Lead.brand_name).contains(term, autoescape=True),
                    func.lower(Lead.collaboration_type).contains(term, autoescape=True),
                ))
            return query.order_by(Lead.last_activity.desc(), Lead.created_at.desc()).all()

    def update(self, owner_id: str, lead_id: Any, fields: Dict[str, Any]) -> Optional[Lead]:
        with self._unit_of_work("update lead"):
            lead = self._owned(owner_id, lead_id, for_update=True)
            if not lead:
                return None
            for key, value in fields.items():
                setattr(lead, key, value)
            lead.last_activity = _next_activity(lead)
            self.db.commit()
            self.db.refresh(lead)
            return lead

    def delete(self, owner_id: str, lead_id: Any) -> bool:
        with self._unit_of_work("delete lead"):
            lead = self._owned(owner_id, lead_id, for_update=True)
            if not lead:
                return False
            self.db.delete(lead)
            self.db.commit()
            return True

    def append_message(
        self,
        owner_id: str,
        lead_id: Any,
        sender: str,
        content: str,
        is_read: bool,
        template_id: Optional[uuid.UUID] = None,
    ) -> Optional[Lead]:
        """
        Insert one message at the end of the lead's thread.

        The owning lead row is locked for the duration of the unit of work and
        the message is a new row, so concurrent appends add to the thread
        rather than replacing it. A racing duplicate position violates the
        (lead_id, position) constraint and fails loudly.
        """
        with self._unit_of_work("append message"):
            lead = self._owned(owner_id, lead_id, for_update=True)
            if not lead:
                return None
            position = self.db.query(func.count(Message.id)).filter(Message.lead_id == lead.id).scalar()
            message = Message(
                lead_id=lead.id,
                position=position,
                sender=sender,
                content=content,
                timestamp=utcnow(),
                is_read=is_read,
                template_id=template_id,
            )
            self.db.add(message)
            lead.last_activity = _next_activity(lead)
            self.db.commit()
            self.db.refresh(lead)
            return lead
