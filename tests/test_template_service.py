import pytest

from creator_leads.errors import NotFoundError, ValidationError
from creator_leads.models.template import Template
from creator_leads.services.template_service import DEFAULT_TEMPLATES, extract_variables


def test_extract_variables_in_first_appearance_order():
    content = "Hi {{brand_name}}, rate is {{proposed_rate}}. Thanks {{brand_name}} {rate_card}"
    assert extract_variables(content) == ["brand_name", "proposed_rate"]


def test_extract_variables_empty():
    assert extract_variables("Plain text {single}") == []
    assert extract_variables("") == []


def test_create_derives_variables(template_store):
    template = template_store.create({
        "name": "Counter",
        "category": "negotiation",
        "content": "Hi {{brand_name}}, rate is {{proposed_rate}}",
        "variables": ["bogus"],
    })
    assert template.variables == ["brand_name", "proposed_rate"]


def test_update_content_recomputes_variables(template_store):
    template = template_store.create({
        "name": "Counter",
        "category": "negotiation",
        "content": "Hi {{brand_name}}, rate is {{proposed_rate}}",
    })
    updated = template_store.update(template.id, {"content": "Hi {{brand_name}}, let's talk."})
    assert updated.variables == ["brand_name"]


def test_update_without_content_keeps_variables(template_store):
    template = template_store.create({"name": "Intro", "category": "initial", "content": "Hi {{brand_name}}"})
    updated = template_store.update(template.id, {"name": "Intro v2", "variables": []})
    assert updated.name == "Intro v2"
    assert updated.variables == ["brand_name"]


def test_invalid_update_changes_nothing(template_store):
    template = template_store.create({"name": "Intro", "category": "initial", "content": "Hi"})
    with pytest.raises(ValidationError):
        template_store.update(template.id, {"category": "spam"})
    assert template_store.get(template.id).category == "initial"


def test_delete_and_missing(template_store):
    template = template_store.create({"name": "Intro", "category": "initial", "content": "Hi"})
    template_store.delete(template.id)
    with pytest.raises(NotFoundError):
        template_store.get(template.id)
    with pytest.raises(NotFoundError):
        template_store.delete(template.id)
    with pytest.raises(NotFoundError):
        template_store.update("garbage", {"name": "x"})


def test_seed_defaults_once(template_store, db_session):
    assert template_store.seed_defaults() == len(DEFAULT_TEMPLATES)
    assert template_store.seed_defaults() == 0
    assert db_session.query(Template).count() == len(DEFAULT_TEMPLATES)

    by_name = {t.name: t for t in template_store.list_templates()}
    assert by_name["Counter Offer"].variables == ["brand_name", "proposed_rate", "deliverables"]
    assert "{rate_card}" in by_name["Rate Card Request"].content


def test_extract_variables_keeps_any_brace_body():
    content = "Rate {{proposed rate}} for {{ deliverables }} and {{proposed rate}} again"
    assert extract_variables(content) == ["proposed rate", " deliverables "]
