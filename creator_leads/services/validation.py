"""
Pure validation for lead, message and template payloads.

Nothing here touches storage. Each function takes plain data keyed by the
internal (snake_case) field names and either returns a cleaned copy or raises
ValidationError naming the offending fields by their wire names.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from creator_leads.errors import ValidationError
from creator_leads.models.lead import LEAD_STATUSES
from creator_leads.models.message import MESSAGE_SENDERS
from creator_leads.models.template import TEMPLATE_CATEGORIES

REQUIRED_LEAD_FIELDS = ("brand_name", "collaboration_type", "budget_range")
OPTIONAL_LEAD_FIELDS = ("brand_logo", "ai_confidence", "extracted_info")
MUTABLE_LEAD_FIELDS = REQUIRED_LEAD_FIELDS + OPTIONAL_LEAD_FIELDS + ("status",)

REQUIRED_TEMPLATE_FIELDS = ("name", "category", "content")
MUTABLE_TEMPLATE_FIELDS = REQUIRED_TEMPLATE_FIELDS + ("subject",)
DERIVED_TEMPLATE_FIELDS = ("variables",)

FIELD_LABELS = {
    "brand_name": "brandName",
    "brand_logo": "brandLogo",
    "collaboration_type": "collaborationType",
    "budget_range": "budgetRange",
    "ai_confidence": "aiConfidence",
    "extracted_info": "extractedInfo",
    "owner_id": "ownerId",
    "last_activity": "lastActivity",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


class ExtractedInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    industry: Optional[str] = None
    deliverables: Optional[List[str]] = None
    timeline: Optional[str] = None
    specialRequirements: Optional[List[str]] = None


def _label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def _labels(fields: Iterable[str]) -> str:
    return ", ".join(_label(f) for f in fields)


def _clean_str(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{_label(field)} must be a string")
    return value.strip()


def _reject_unknown(fields: Dict[str, Any], allowed: Iterable[str]) -> None:
    rejected = [k for k in fields if k not in allowed]
    if rejected:
        raise ValidationError(f"Fields cannot be set: {_labels(rejected)}")


def validate_status(status: Any) -> str:
    if not status:
        raise ValidationError("Status is required")
    if status not in LEAD_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(LEAD_STATUSES)}")
    return status


def validate_ai_confidence(value: Any) -> int:
    # bool is an int subclass but never a meaningful confidence
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("aiConfidence must be an integer")
    if value < 0 or value > 100:
        raise ValidationError("aiConfidence must be between 0 and 100")
    return value


def validate_extracted_info(value: Any) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("extractedInfo must be an object")
    try:
        info = ExtractedInfo.model_validate(value)
    except PydanticValidationError as e:
        bad = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(f"Invalid extractedInfo fields: {', '.join(bad)}") from e
    return info.model_dump(exclude_none=True)


def _clean_optional_lead_fields(fields: Dict[str, Any], cleaned: Dict[str, Any]) -> None:
    if "brand_logo" in fields:
        cleaned["brand_logo"] = _clean_str("brand_logo", fields["brand_logo"]) or None
    if "ai_confidence" in fields and fields["ai_confidence"] is not None:
        cleaned["ai_confidence"] = validate_ai_confidence(fields["ai_confidence"])
    if "extracted_info" in fields:
        cleaned["extracted_info"] = validate_extracted_info(fields["extracted_info"])


def validate_new_lead(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate the payload of a lead about to be created.

    brandName, collaborationType and budgetRange are required and must be
    non-empty after trimming. Status, activity and messages are never taken
    from the caller.

    Returns:
        dict of cleaned fields ready to persist
    """
    _reject_unknown(fields, REQUIRED_LEAD_FIELDS + OPTIONAL_LEAD_FIELDS)

    cleaned: Dict[str, Any] = {}
    missing = []
    for field in REQUIRED_LEAD_FIELDS:
        value = _clean_str(field, fields.get(field))
        if not value:
            missing.append(field)
        else:
            cleaned[field] = value
    if missing:
        raise ValidationError(f"Missing required fields: {_labels(missing)}")

    _clean_optional_lead_fields(fields, cleaned)
    return cleaned


def validate_lead_patch(partial: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a partial update. Identity, ownership and the message thread are read-only."""
    _reject_unknown(partial, MUTABLE_LEAD_FIELDS)

    cleaned: Dict[str, Any] = {}
    empty = []
    for field in REQUIRED_LEAD_FIELDS:
        if field in partial:
            value = _clean_str(field, partial[field])
            if not value:
                empty.append(field)
            else:
                cleaned[field] = value
    if empty:
        raise ValidationError(f"Fields cannot be empty: {_labels(empty)}")

    _clean_optional_lead_fields(partial, cleaned)
    if "status" in partial:
        cleaned["status"] = validate_status(partial["status"])
    return cleaned


def validate_message(sender: Any, content: Any) -> None:
    if not sender or not content:
        raise ValidationError("Sender and content are required")
    if sender not in MESSAGE_SENDERS:
        raise ValidationError(f"Invalid sender. Must be one of: {', '.join(MESSAGE_SENDERS)}")
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("content must be a non-empty string")


def validate_category(category: Any) -> str:
    if category not in TEMPLATE_CATEGORIES:
        raise ValidationError(f"Invalid category. Must be one of: {', '.join(TEMPLATE_CATEGORIES)}")
    return category


def _without_derived(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in DERIVED_TEMPLATE_FIELDS}


def validate_new_template(fields: Dict[str, Any]) -> Dict[str, Any]:
    fields = _without_derived(fields)
    _reject_unknown(fields, MUTABLE_TEMPLATE_FIELDS)

    cleaned: Dict[str, Any] = {}
    missing = []
    for field in REQUIRED_TEMPLATE_FIELDS:
        value = fields.get(field)
        if field != "content":
            value = _clean_str(field, value)
        elif value is not None and not isinstance(value, str):
            raise ValidationError("content must be a string")
        if not value or not value.strip():
            missing.append(field)
        else:
            cleaned[field] = value
    if missing:
        raise ValidationError(f"Missing required fields: {_labels(missing)}")

    validate_category(cleaned["category"])
    if "subject" in fields:
        cleaned["subject"] = _clean_str("subject", fields["subject"]) or None
    return cleaned


def validate_template_patch(partial: Dict[str, Any]) -> Dict[str, Any]:
    partial = _without_derived(partial)
    _reject_unknown(partial, MUTABLE_TEMPLATE_FIELDS)

    cleaned: Dict[str, Any] = {}
    empty = []
    for field in REQUIRED_TEMPLATE_FIELDS:
        if field not in partial:
            continue
        value = partial[field]
        if field != "content":
            value = _clean_str(field, value)
        elif value is not None and not isinstance(value, str):
            raise ValidationError("content must be a string")
        if not value or not value.strip():
            empty.append(field)
        else:
            cleaned[field] = value
    if empty:
        raise ValidationError(f"Fields cannot be empty: {_labels(empty)}")

    if "category" in cleaned:
        validate_category(cleaned["category"])
    if "subject" in partial:
        cleaned["subject"] = _clean_str("subject", partial["subject"]) or None
    return cleaned
