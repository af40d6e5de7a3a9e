"""Tests for message template loading and rendering."""

import pytest
from core.catalog import CatalogItem
from core.notifications.templates import (
    get_message,
    load_templates,
    render_message,
    render_reminder,
)

IDEA = CatalogItem(
    id=3,
    title="Plan a phone-free evening",
    description="Put both phones in a drawer for the night.",
    category="quality_time",
)


class TestLoadTemplates:
    def test_loads_yaml_file(self):
        templates = load_templates()
        assert isinstance(templates, dict)
        assert "reminder" in templates

    def test_reminder_has_every_channel(self):
        reminder = load_templates()["reminder"]
        assert "discord" in reminder
        assert "whatsapp" in reminder


class TestRenderMessage:
    def test_renders_simple_variable(self):
        result = render_message("Hello {name}!", {"name": "Alice"})
        assert result == "Hello Alice!"

    def test_missing_variable_raises(self):
        with pytest.raises(KeyError):
            render_message("Hello {name}!", {})

    def test_braces_in_values_are_left_alone(self):
        result = render_message("**{title}**", {"title": "Say {it}"})
        assert result == "**Say {it}**"


class TestRenderReminder:
    def test_discord_reminder(self):
        result = render_reminder(IDEA)

        assert result == (
            "💕 **Something Sweet for Today**\n\n"
            "**Plan a phone-free evening**\n\n"
            "Put both phones in a drawer for the night.\n\n"
            "*Category: quality time*"
        )

    def test_whatsapp_reminder(self):
        result = render_reminder(IDEA, channel="whatsapp")

        assert "*Plan a phone-free evening*" in result
        assert "_Category: quality time_" in result

    def test_unknown_channel(self):
        with pytest.raises(KeyError):
            get_message("reminder", "carrier_pigeon", {})
