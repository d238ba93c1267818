from typing import Any, List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from creator_leads.api.deps import get_current_account, get_template_store
from creator_leads.services.template_service import TemplateStore

# Templates are global; the account dependency only gates access.
router = APIRouter(prefix="/templates", tags=["templates"], dependencies=[Depends(get_current_account)])

class TemplateReq(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    # accepted for client compatibility, always re-derived from content
    variables: Optional[List[Any]] = None


def _to_fields(req: TemplateReq):
    data = req.model_dump(exclude_unset=True)
    data.pop("variables", None)
    return data


@router.get("")
def list_templates(store: TemplateStore = Depends(get_template_store)):
    return {"success": True, "templates": [t.to_dict() for t in store.list_templates()]}


@router.get("/{template_id}")
def get_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    return {"success": True, "template": store.get(template_id).to_dict()}


@router.post("", status_code=201)
def create_template(req: TemplateReq, store: TemplateStore = Depends(get_template_store)):
    template = store.create(_to_fields(req))
    return {"success": True, "message": "Template created successfully", "template": template.to_dict()}


@router.put("/{template_id}")
def update_template(template_id: str, req: TemplateReq, store: TemplateStore = Depends(get_template_store)):
    template = store.update(template_id, _to_fields(req))
    return {"success": True, "message": "Template updated successfully", "template": template.to_dict()}


@router.delete("/{template_id}")
def delete_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    store.delete(template_id)
    return {"success": True, "message": "Template deleted successfully"}
