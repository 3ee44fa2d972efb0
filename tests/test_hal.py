"""
Unit tests for HAL models and helpers.
"""

import pytest
from pydantic import ValidationError

from launchpad.hal import (
    HalResource,
    HalTemplate,
    HalTemplateProperty,
    get_embedded,
    get_link_href,
    get_template,
    has_link,
    has_template,
    is_hal_error,
    is_hal_object,
)

DOCUMENT = {
    "label": "ci",
    "_links": {
        "self": {"href": "/users/u1/api-keys/k1"},
        "alternate": [{"href": "/a"}, {"href": "/b"}],
    },
    "_embedded": {"apiKeys": [{"apiKeyId": "k1"}]},
    "_templates": {
        "delete": {"title": "Delete API Key", "method": "DELETE", "target": "/users/u1/api-keys/delete",
                   "properties": [{"name": "apiKeyIds", "type": "hidden", "value": ["k1"]}]},
    },
}


class TestHalModels:
    """Test HAL model parsing and serialization."""

    def test_resource_keeps_domain_properties(self):
        resource = HalResource.model_validate(DOCUMENT)

        assert "label" in resource
        assert resource["label"] == "ci"
        assert resource.properties == {"label": "ci"}
        assert resource.templates["delete"].method == "DELETE"

    def test_resource_round_trips_wire_form(self):
        assert HalResource.model_validate(DOCUMENT).to_dict() == DOCUMENT

    def test_template_property_serializes_only_set_members(self):
        prop = HalTemplateProperty(name="label", required=True, max_length=100)
        assert prop.to_dict() == {"name": "label", "required": True, "maxLength": 100}

    def test_explicit_none_value_is_a_value(self):
        assert HalTemplateProperty(name="x", value=None).has_value
        assert not HalTemplateProperty(name="x").has_value

    def test_duplicate_property_names_are_rejected(self):
        with pytest.raises(ValidationError):
            HalTemplate.coerce({"properties": [{"name": "a"}, {"name": "a"}]})

    def test_null_properties_become_empty(self):
        assert HalTemplate.coerce({"method": "GET", "properties": None}).properties == []

    def test_normalized_method(self):
        assert HalTemplate(method="patch").normalized_method == "PATCH"
        assert HalTemplate(method="FETCH").normalized_method is None
        assert HalTemplate().normalized_method is None


class TestHalUtils:
    """Test helpers over parsed and raw documents."""

    @pytest.mark.parametrize("resource", [DOCUMENT, HalResource.model_validate(DOCUMENT)])
    def test_link_lookup(self, resource):
        assert get_link_href(resource, "self") == "/users/u1/api-keys/k1"
        assert get_link_href(resource, "alternate") == "/a"
        assert get_link_href(resource, ["missing", "self"]) == "/users/u1/api-keys/k1"
        assert get_link_href(resource, "missing") is None
        assert has_link(resource, "self")

    @pytest.mark.parametrize("resource", [DOCUMENT, HalResource.model_validate(DOCUMENT)])
    def test_template_lookup(self, resource):
        assert get_template(resource, "delete").title == "Delete API Key"
        assert get_template(resource, "missing") is None
        assert has_template(resource, "delete")
        assert not has_template(resource, "missing")

    def test_embedded_lookup(self):
        assert get_embedded(DOCUMENT, "apiKeys") == [{"apiKeyId": "k1"}]
        assert get_embedded({"label": "x"}, "apiKeys") is None

    def test_is_hal_object(self):
        assert is_hal_object(DOCUMENT)
        assert not is_hal_object({"label": "x"})
        assert not is_hal_object(["_links"])

    def test_is_hal_error(self):
        error = {"status": 404, "title": "Not Found", "_links": {"home": {"href": "/"}}}
        assert is_hal_error(error)
        assert not is_hal_error({"status": 404, "title": "Not Found"})
        assert not is_hal_error({"status": True, "title": "x", "_links": {}})
