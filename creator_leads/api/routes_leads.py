from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from creator_leads.api.deps import (
    get_conversation,
    get_current_account,
    get_lifecycle,
    get_template_store,
)
from creator_leads.errors import ValidationError
from creator_leads.services.conversation_service import ConversationManager
from creator_leads.services.lifecycle_service import LeadLifecycleManager
from creator_leads.services.render_service import render
from creator_leads.services.template_service import TemplateStore

router = APIRouter(prefix="/leads", tags=["leads"])

# wire name -> model attribute
WIRE_FIELDS = {
    "brandName": "brand_name",
    "brandLogo": "brand_logo",
    "collaborationType": "collaboration_type",
    "budgetRange": "budget_range",
    "aiConfidence": "ai_confidence",
    "extractedInfo": "extracted_info",
    "status": "status",
}

class LeadCreateReq(BaseModel):
    brandName: Optional[str] = None
    brandLogo: Optional[str] = None
    collaborationType: Optional[str] = None
    budgetRange: Optional[str] = None
    aiConfidence: Optional[int] = None
    extractedInfo: Optional[Dict[str, Any]] = None

class LeadUpdateReq(LeadCreateReq):
    # unknown keys are kept so the lifecycle manager can reject them by name
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None

class StatusReq(BaseModel):
    status: Optional[str] = None

class RespondReq(BaseModel):
    message: Optional[str] = None
    templateId: Optional[str] = None

class MessageReq(BaseModel):
    sender: Optional[str] = None
    content: Optional[str] = None

class RenderReq(BaseModel):
    templateId: Optional[str] = None


def _to_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {WIRE_FIELDS.get(key, key): value for key, value in data.items()}


@router.get("")
def list_leads(
    status: Optional[str] = None,
    search: Optional[str] = None,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    leads = lifecycle.list_leads(account_id, status=status, search=search)
    return {"success": True, "leads": [lead.to_dict() for lead in leads]}


@router.get("/{lead_id}")
def get_lead(
    lead_id: str,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    lead = lifecycle.get_lead(account_id, lead_id)
    return {"success": True, "lead": lead.to_dict()}


@router.post("", status_code=201)
def create_lead(
    req: LeadCreateReq,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    lead = lifecycle.create_lead(account_id, _to_fields(req.model_dump(exclude_unset=True)))
    return {"success": True, "message": "Lead created successfully", "lead": lead.to_dict()}


@router.put("/{lead_id}")
def update_lead(
    lead_id: str,
    req: LeadUpdateReq,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    data = req.model_dump(exclude_unset=True)
    data.update(req.model_extra or {})
    lead = lifecycle.update_fields(account_id, lead_id, _to_fields(data))
    return {"success": True, "message": "Lead updated successfully", "lead": lead.to_dict()}


@router.put("/{lead_id}/status")
def update_status(
    lead_id: str,
    req: StatusReq,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    lead = lifecycle.set_status(account_id, lead_id, req.status)
    return {"success": True, "message": "Lead status updated successfully", "lead": lead.to_dict()}


@router.post("/{lead_id}/respond")
def respond(
    lead_id: str,
    req: RespondReq,
    account_id: str = Depends(get_current_account),
    conversation: ConversationManager = Depends(get_conversation),
):
    if not req.message:
        raise ValidationError("Message is required")
    lead = conversation.respond(account_id, lead_id, req.message, template_id=req.templateId)
    return {"success": True, "message": "Response sent successfully", "lead": lead.to_dict()}


@router.post("/{lead_id}/message")
def add_message(
    lead_id: str,
    req: MessageReq,
    account_id: str = Depends(get_current_account),
    conversation: ConversationManager = Depends(get_conversation),
):
    lead = conversation.append_message(account_id, lead_id, req.sender, req.content)
    return {"success": True, "message": "Message added successfully", "lead": lead.to_dict()}


@router.get("/{lead_id}/conversation")
def get_conversation_thread(
    lead_id: str,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
    conversation: ConversationManager = Depends(get_conversation),
):
    lead = lifecycle.get_lead(account_id, lead_id)
    return {
        "success": True,
        "messages": [m.to_dict() for m in lead.messages],
        "summary": conversation.summarize(account_id, lead_id),
    }


@router.post("/{lead_id}/render")
def render_template(
    lead_id: str,
    req: RenderReq,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
    templates: TemplateStore = Depends(get_template_store),
):
    if not req.templateId:
        raise ValidationError("templateId is required")
    lead = lifecycle.get_lead(account_id, lead_id)
    template = templates.get(req.templateId)
    return {"success": True, "templateId": str(template.id), "content": render(template.content, lead)}


@router.delete("/{lead_id}")
def delete_lead(
    lead_id: str,
    account_id: str = Depends(get_current_account),
    lifecycle: LeadLifecycleManager = Depends(get_lifecycle),
):
    lifecycle.delete_lead(account_id, lead_id)
    return {"success": True, "message": "Lead deleted successfully"}
