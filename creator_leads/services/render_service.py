"""
Template rendering against a lead.

Well-known placeholders:
- {brand_name}         -> lead brand name
- {collaboration_type} -> lead collaboration type
- {budget_range}       -> lead budget range
- {rate_card}          -> fixed rate card block

Replacement is literal and single-brace only; the double-brace {{name}}
placeholders belong to template variables and are not resolved here, so
"{{brand_name}}" renders as "{Acme}". Anything else is left verbatim.
"""

from typing import Any

RATE_CARD_BLOCK = """
📋 My Rate Card:
• Instagram Post: $500-1,000
• Instagram Story (3 slides): $300-500
• Instagram Reel: $800-1,200
• TikTok Video: $600-1,000
• YouTube Integration: $1,500-2,500
• Long-term Partnership: Custom pricing available

Package deals and bulk collaborations are available with discounts."""

LEAD_PLACEHOLDERS = ("brand_name", "collaboration_type", "budget_range")


def _replace(content: str, name: str, value: str) -> str:
    return content.replace("{" + name + "}", value)


def render(template_content: str, lead: Any) -> str:
    """
    Produce final response text from template content and a lead.

    Args:
        template_content: Template body
        lead: Anything exposing brand_name, collaboration_type and budget_range

    Returns:
        str: Rendered text
    """
    rendered = template_content
    for placeholder in LEAD_PLACEHOLDERS:
        value = getattr(lead, placeholder, None)
        if value is None:
            continue
        rendered = _replace(rendered, placeholder, str(value))

    if "{rate_card}" in template_content:
        rendered = _replace(rendered, "rate_card", RATE_CARD_BLOCK)

    return rendered
