"""Tests for recordgen.models module."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from recordgen.models import (
    ActionEvent,
    LegacyRoleLocator,
    RecordingHeader,
    VersionedLocator,
)


class TestRecordingHeader:
    """Tests for RecordingHeader model."""

    def test_defaults(self):
        header = RecordingHeader.model_validate({})
        assert header.browser_name == "chromium"
        assert header.launch_options.headless is True
        assert header.context_options == {}

    def test_reads_wire_field_names(self):
        header = RecordingHeader.model_validate({
            "browserName": "firefox",
            "launchOptions": {"headless": False},
            "contextOptions": {"locale": "en-US"},
            "generateAutoExpect": True,
        })
        assert header.browser_name == "firefox"
        assert header.launch_options.headless is False
        assert header.context_options == {"locale": "en-US"}
        assert header.model_extra["generateAutoExpect"] is True

    def test_accepts_null_headless(self):
        header = RecordingHeader.model_validate({"launchOptions": {"headless": None}})
        assert header.launch_options.headless is None

    def test_rejects_unknown_browser(self):
        with pytest.raises(ValidationError):
            RecordingHeader.model_validate({"browserName": "opera"})


class TestActionEvent:
    """Tests for ActionEvent model."""

    def test_minimal_event(self):
        event = ActionEvent.model_validate({"name": "closePage"})
        assert event.name == "closePage"
        assert event.signals == []
        assert event.page_alias == "page"
        assert event.frame_path == []
        assert event.locator is None

    def test_full_event(self):
        event = ActionEvent.model_validate({
            "name": "click",
            "selector": "internal:role=button",
            "clickCount": 2,
            "modifiers": 8,
            "position": {"x": 10, "y": 20.5},
            "signals": [{"name": "popup"}],
            "pageAlias": "page1",
            "framePath": ["iframe"],
            "pageGuid": "page@123",
            "locator": {"kind": "role", "body": "button", "options": {}},
        })
        assert event.click_count == 2
        assert event.modifiers == 8
        assert event.position.x == 10
        assert event.position.y == 20.5
        assert [s.name for s in event.signals] == ["popup"]
        assert event.page_alias == "page1"
        assert event.frame_path == ["iframe"]
        assert event.model_extra["pageGuid"] == "page@123"
        assert event.locator["kind"] == "role"

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            ActionEvent.model_validate({"selector": "button"})


class TestLocatorModels:
    """Tests for the two locator description generations."""

    def test_legacy_role(self):
        desc = LegacyRoleLocator.model_validate({"role": "button", "name": "OK"})
        assert desc.role == "button"
        assert desc.name == "OK"
        assert desc.exact is None

    def test_versioned_defaults(self):
        desc = VersionedLocator.model_validate({"kind": "css", "body": "h1"})
        assert desc.options.name is None
        assert desc.options.exact is None
        assert desc.options.attrs == []
        assert desc.next is None

    def test_versioned_chain(self):
        desc = VersionedLocator.model_validate({
            "kind": "role",
            "body": "row",
            "options": {"attrs": [{"name": "name", "value": "Alice"}]},
            "next": {"kind": "text", "body": "Edit", "options": {"exact": True}},
        })
        assert desc.options.attrs[0].value == "Alice"
        assert desc.next.kind == "text"
        assert desc.next.options.exact is True
