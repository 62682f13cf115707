"""Tests for type mapping and the shared JSON fragments."""
import json

import pytest

from connector_generator.models.schema import OperationParameter
from connector_generator.utils.icon_mapper import IconRegistry, get_service_icon, has_custom_icon
from connector_generator.utils.type_mapper import (
    collect_type_warnings,
    convert_to_element_property,
    determine_category,
    format_default_value,
    generate_output_mapping,
    generate_payload_template,
    generate_tags,
    get_service_color,
    map_type_to_field_kind,
    map_type_with_warning,
)


def _param(name: str = "field", **kwargs) -> OperationParameter:
    kwargs.setdefault("display_name", name.title())
    return OperationParameter(name=name, **kwargs)


# =========================================================================
# Field kinds
# =========================================================================

class TestFieldKinds:

    @pytest.mark.parametrize(
        "generic_type,kind",
        [
            ("string", "String"),
            ("number", "String"),
            ("dateTime", "String"),
            ("boolean", "Dropdown"),
            ("options", "Dropdown"),
            ("multiOptions", "Dropdown"),
            ("json", "Text"),
            ("fixedCollection", "Text"),
            ("collection", "Text"),
        ],
    )
    def test_known_types(self, generic_type, kind):
        assert map_type_to_field_kind(generic_type) == kind

    def test_unknown_type_falls_back_to_string(self):
        assert map_type_to_field_kind("resourceMapper") == "String"

    def test_fallback_is_reported(self):
        kind, warning = map_type_with_warning("resourceMapper", "columns")

        assert kind == "String"
        assert warning.code == "unknown_parameter_type"
        assert warning.context == {"type": "resourceMapper", "parameter": "columns"}

    def test_known_type_has_no_warning(self):
        assert map_type_with_warning("json") == ("Text", None)

    def test_collect_type_warnings(self):
        params = [_param("a"), _param("b", type="resourceMapper")]
        warnings = collect_type_warnings(params)

        assert [w.context["parameter"] for w in warnings] == ["b"]


# =========================================================================
# Element properties
# =========================================================================

class TestElementProperty:

    def test_required_string(self):
        prop = convert_to_element_property(_param("channel", required=True, description="Where to post"))

        assert prop.type == "String"
        assert prop.value == "${channel}"
        assert prop.binding.name == "channel"
        assert prop.binding.type == "camunda:inputParameter"
        assert prop.group == "input"
        assert prop.description == "Where to post"
        assert prop.constraints.not_empty is True

    def test_optional_has_no_constraints(self):
        assert convert_to_element_property(_param("cc")).constraints is None

    def test_boolean_default_true(self):
        prop = convert_to_element_property(_param("flag", type="boolean", default=True))
        data = prop.to_dict()

        assert data["choices"] == [{"name": "True", "value": "true"}, {"name": "False", "value": "false"}]
        assert data["value"] == "true"

    def test_boolean_without_default_is_false(self):
        assert convert_to_element_property(_param("flag", type="boolean")).value == "false"

    def test_options_default_and_first_value(self):
        options = [{"name": "Low", "value": "low"}, {"name": "High", "value": "high"}]

        first = convert_to_element_property(_param("priority", type="options", options=options))
        chosen = convert_to_element_property(_param("priority", type="options", options=options, default="high"))

        assert first.type == "Dropdown"
        assert [c.value for c in first.choices] == ["low", "high"]
        assert first.value == "low"
        assert chosen.value == "high"

    def test_custom_group(self):
        assert convert_to_element_property(_param("x"), group="output").group == "output"


# =========================================================================
# JSON fragments
# =========================================================================

class TestJsonFragments:

    def test_payload_keys_follow_parameter_order(self):
        params = [_param("zeta"), _param("alpha"), _param("mid")]
        payload = json.loads(generate_payload_template(params))

        assert list(payload) == ["zeta", "alpha", "mid"]
        assert payload == {"zeta": "${zeta}", "alpha": "${alpha}", "mid": "${mid}"}

    def test_payload_is_two_space_indented(self):
        assert generate_payload_template([_param("a")]) == '{\n  "a": "${a}"\n}'

    def test_empty_payload(self):
        assert json.loads(generate_payload_template([])) == {}

    def test_output_mapping(self):
        assert json.loads(generate_output_mapping()) == {
            "success": "$.success",
            "statusCode": "$.statusCode",
            "error": "$.error",
        }

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({}, ""),
            ({"placeholder": "#general"}, "#general"),
            ({"type": "boolean", "default": True}, "true"),
            ({"type": "number", "default": 50}, "50"),
            ({"type": "collection", "default": {}}, ""),
            ({"type": "json", "default": {"a": 1}}, '{"a":1}'),
            ({"default": "hello"}, "hello"),
        ],
    )
    def test_format_default_value(self, kwargs, expected):
        assert format_default_value(_param("x", **kwargs)) == expected


# =========================================================================
# Classifiers
# =========================================================================

class TestClassifiers:

    @pytest.mark.parametrize(
        "name,category",
        [
            ("Slack", "communication"),
            ("Gmail", "communication"),
            ("Google Sheets", "productivity"),
            ("HubSpot", "business"),
            ("GitHub", "developer-tools"),
            ("Postgres", "data"),
            ("OpenAI", "ai"),
            ("Acme", "integrations"),
        ],
    )
    def test_determine_category(self, name, category):
        assert determine_category(name) == category

    def test_service_color(self):
        assert get_service_color("Slack") == "#4A154B"
        assert get_service_color("Acme") == "#6366f1"

    def test_tags_are_ordered_and_unique(self):
        assert generate_tags("Slack", "message", "send") == ["slack", "message", "send", "communication"]
        assert generate_tags("Slack", "slack") == ["slack", "communication"]


# =========================================================================
# Icons
# =========================================================================

class TestIcons:

    def test_builtin_icons(self):
        assert get_service_icon("gmail") == "icons/gmail.svg"
        assert get_service_icon("Slack") == "icons/slack.svg"
        assert has_custom_icon("gmail") is True

    def test_substring_match(self):
        assert get_service_icon("google-sheets-v2") == "ph-table"

    def test_default_icon(self):
        assert get_service_icon("qqq") == "ph-plug"
        assert has_custom_icon("qqq") is False

    def test_registry_is_isolated(self):
        registry = IconRegistry({})
        registry.set_icon("Acme", "ph-rocket")

        assert registry.get("acme") == "ph-rocket"
        assert registry.get("slack") == "ph-plug"
