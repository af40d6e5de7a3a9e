"""Message template loading and rendering."""

from pathlib import Path

import yaml

from core.catalog import CatalogItem


_templates: dict | None = None


def load_templates() -> dict:
    """
    Load message templates from YAML file.

    Caches templates after first load.
    """
    global _templates
    if _templates is not None:
        return _templates

    yaml_path = Path(__file__).parent / "messages.yaml"
    with open(yaml_path, encoding="utf-8") as f:
        _templates = yaml.safe_load(f)

    return _templates


def render_message(template: str, context: dict) -> str:
    """
    Render a message template with context variables.

    Args:
        template: String with {variable} placeholders
        context: Dict of variable names to values

    Returns:
        Rendered string

    Raises:
        KeyError: If a required variable is missing from context
    """
    return template.format(**context)


def get_message(message_type: str, channel: str, context: dict) -> str:
    """
    Get and render a message for a specific type and channel.

    Args:
        message_type: e.g., "reminder"
        channel: e.g., "discord", "whatsapp"
        context: Variables to substitute

    Returns:
        Rendered message string
    """
    templates = load_templates()
    template = templates[message_type][channel]
    return render_message(template, context)


def render_reminder(item: CatalogItem, channel: str = "discord") -> str:
    """Render a sweet idea into a reminder message body."""
    return get_message(
        "reminder",
        channel,
        {
            "title": item.title,
            "description": item.description,
            "category": item.category_label,
        },
    )
