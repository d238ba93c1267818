import pytest

from creator_leads.errors import NotFoundError, ValidationError
from tests.conftest import ACCOUNT_A, ACCOUNT_B


def test_messages_preserve_call_order(conversation, lead):
    sent = [
        ("brand", "Hi! We love your content."),
        ("influencer", "Thanks! What did you have in mind?"),
        ("brand", "One reel and three stories."),
        ("brand", "Budget is flexible."),
    ]
    for sender, content in sent:
        result = conversation.append_message(ACCOUNT_A, lead.id, sender, content)

    assert len(result.messages) == len(sent)
    assert [(m.sender, m.content) for m in result.messages] == sent
    assert [m.position for m in result.messages] == list(range(len(sent)))
    timestamps = [m.timestamp for m in result.messages]
    assert timestamps == sorted(timestamps)


def test_read_flag_depends_on_sender(conversation, lead):
    result = conversation.append_message(ACCOUNT_A, lead.id, "brand", "Inbound")
    result = conversation.append_message(ACCOUNT_A, lead.id, "influencer", "Outbound")
    assert [m.is_read for m in result.messages] == [False, True]


def test_respond_is_influencer_message(conversation, template_store, lead):
    template = template_store.create({"name": "Intro", "category": "initial", "content": "Hi {{brand_name}}"})
    result = conversation.respond(ACCOUNT_A, lead.id, "Hi Acme", template_id=str(template.id))

    message = result.messages[-1]
    assert message.sender == "influencer"
    assert message.content == "Hi Acme"
    assert message.is_read is True
    assert message.template_id == template.id


@pytest.mark.parametrize("sender,content", [("brand", ""), ("sponsor", "Hello")])
def test_invalid_append_leaves_thread_unchanged(conversation, lifecycle, lead, sender, content):
    with pytest.raises(ValidationError):
        conversation.append_message(ACCOUNT_A, lead.id, sender, content)
    assert lifecycle.get_lead(ACCOUNT_A, lead.id).messages == []


def test_append_to_foreign_lead(conversation, lifecycle, lead):
    with pytest.raises(NotFoundError):
        conversation.append_message(ACCOUNT_B, lead.id, "brand", "Hello")
    assert lifecycle.get_lead(ACCOUNT_A, lead.id).messages == []


def test_summary_counts(conversation, lead):
    conversation.append_message(ACCOUNT_A, lead.id, "brand", "One")
    conversation.append_message(ACCOUNT_A, lead.id, "brand", "Two")
    conversation.respond(ACCOUNT_A, lead.id, "Reply")

    assert conversation.summarize(ACCOUNT_A, lead.id) == {
        "total": 3,
        "brand": 2,
        "influencer": 1,
        "unread": 2,
    }
