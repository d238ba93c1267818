import pytest

from creator_leads.errors import ValidationError
from creator_leads.services import validation


def test_new_lead_trims_required_fields():
    cleaned = validation.validate_new_lead({
        "brand_name": "  Acme  ",
        "collaboration_type": "Reel",
        "budget_range": " $500 ",
    })
    assert cleaned == {"brand_name": "Acme", "collaboration_type": "Reel", "budget_range": "$500"}


@pytest.mark.parametrize("missing", ["brand_name", "collaboration_type", "budget_range"])
def test_new_lead_requires_each_field(missing):
    fields = {"brand_name": "Acme", "collaboration_type": "Reel", "budget_range": "$500"}
    fields[missing] = "   "
    with pytest.raises(ValidationError) as exc:
        validation.validate_new_lead(fields)
    assert validation.FIELD_LABELS[missing] in exc.value.message


def test_new_lead_lists_every_missing_field():
    with pytest.raises(ValidationError) as exc:
        validation.validate_new_lead({"brand_name": "Acme"})
    assert exc.value.message == "Missing required fields: collaborationType, budgetRange"


@pytest.mark.parametrize("value", [-1, 101, "50", True, 12.5])
def test_ai_confidence_out_of_domain(value):
    with pytest.raises(ValidationError):
        validation.validate_ai_confidence(value)


def test_extracted_info_keeps_known_keys_only():
    info = validation.validate_extracted_info({
        "industry": "Beauty",
        "deliverables": ["1 Reel", "3 Stories"],
        "budgetNotes": "ignored",
    })
    assert info == {"industry": "Beauty", "deliverables": ["1 Reel", "3 Stories"]}


def test_extracted_info_rejects_bad_shape():
    with pytest.raises(ValidationError) as exc:
        validation.validate_extracted_info({"deliverables": "one reel"})
    assert "deliverables" in exc.value.message


@pytest.mark.parametrize("status", ["", None, "archived", "NEW"])
def test_invalid_status(status):
    with pytest.raises(ValidationError):
        validation.validate_status(status)


def test_patch_rejects_read_only_fields():
    with pytest.raises(ValidationError) as exc:
        validation.validate_lead_patch({"owner_id": "someone-else", "messages": []})
    assert "ownerId" in exc.value.message
    assert "messages" in exc.value.message


def test_patch_rejects_emptied_required_field():
    with pytest.raises(ValidationError):
        validation.validate_lead_patch({"brand_name": ""})


def test_patch_allows_status_and_logo_clear():
    cleaned = validation.validate_lead_patch({"status": "accepted", "brand_logo": ""})
    assert cleaned == {"status": "accepted", "brand_logo": None}


@pytest.mark.parametrize("sender,content", [
    ("brand", ""),
    ("brand", "   "),
    (None, "hello"),
    ("agent", "hello"),
])
def test_invalid_message(sender, content):
    with pytest.raises(ValidationError):
        validation.validate_message(sender, content)


def test_template_drops_caller_variables():
    cleaned = validation.validate_new_template({
        "name": "Intro",
        "category": "initial",
        "content": "Hi {{brand_name}}",
        "variables": ["something_else"],
    })
    assert "variables" not in cleaned


def test_template_category_domain():
    with pytest.raises(ValidationError) as exc:
        validation.validate_new_template({"name": "Intro", "category": "followup", "content": "Hi"})
    assert "Invalid category" in exc.value.message
