from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from creator_leads.config import settings
from creator_leads.models.db import get_db
from creator_leads.services.conversation_service import ConversationManager
from creator_leads.services.lead_repository import LeadRepository
from creator_leads.services.lifecycle_service import LeadLifecycleManager
from creator_leads.services.template_service import TemplateStore


def get_current_account(request: Request) -> str:
    """Account identity verified and injected by the upstream auth layer; never read from the body."""
    account_id = (request.headers.get(settings.ACCOUNT_HEADER) or "").strip()
    if not account_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return account_id


def get_lead_repository(db: Session = Depends(get_db)) -> LeadRepository:
    return LeadRepository(db)


def get_lifecycle(repository: LeadRepository = Depends(get_lead_repository)) -> LeadLifecycleManager:
    return LeadLifecycleManager(repository)


def get_conversation(repository: LeadRepository = Depends(get_lead_repository)) -> ConversationManager:
    return ConversationManager(repository)


def get_template_store(db: Session = Depends(get_db)) -> TemplateStore:
    return TemplateStore(db)
