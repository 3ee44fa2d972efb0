"""
Unit tests for the HAL-FORMS template runtime.

Tests categorization, property source resolution, request body building
and confirmation dialogs.
"""

import pytest

from launchpad.hal.models import HalTemplate, HalTemplateProperty
from launchpad.templates import (
    EmptySelectionError,
    MissingRequiredFieldError,
    PropertySource,
    TemplateCategory,
    TemplateExecutionContext,
    TemplateValidationError,
    build_template_data,
    categorize_template,
    get_confirmation_config,
    get_property_source,
)


def template(method="POST", properties=None, title=None):
    body = {"method": method, "target": "/x"}
    if properties is not None:
        body["properties"] = properties
    if title is not None:
        body["title"] = title
    return HalTemplate.coerce(body)


class TestCategorization:
    """Test categorize_template rules."""

    def test_post_with_only_hidden_properties_is_navigation(self):
        """A next-page template posting a hidden cursor executes immediately."""
        next_page = template("POST", [{"name": "pagingInstruction", "type": "hidden", "value": "{}"}])
        assert categorize_template("next", next_page) is TemplateCategory.NAVIGATION

    def test_get_without_properties_is_navigation(self):
        assert categorize_template("self", template("GET")) is TemplateCategory.NAVIGATION

    def test_missing_properties_count_as_none(self):
        """Templates with no properties member behave like an empty list."""
        assert categorize_template("any", {"method": "POST"}) is TemplateCategory.NAVIGATION

    def test_visible_property_makes_a_form(self):
        create = template("POST", [{"name": "label", "type": "text", "required": True}])
        assert categorize_template("default", create) is TemplateCategory.FORM

    def test_delete_with_visible_property_is_a_form(self):
        """A DELETE asking for input is still a form."""
        delete_with_reason = template("DELETE", [{"name": "reason", "type": "text"}])
        assert categorize_template("delete", delete_with_reason) is TemplateCategory.FORM

    def test_delete_with_hidden_properties_is_an_action(self):
        delete = template("DELETE", [{"name": "sessionIds", "type": "hidden", "value": ["s1"]}])
        assert categorize_template("delete", delete) is TemplateCategory.ACTION

    def test_method_is_case_insensitive(self):
        assert categorize_template("self", template("post")) is TemplateCategory.NAVIGATION
        assert categorize_template("delete", template("delete")) is TemplateCategory.ACTION

    def test_unknown_or_missing_method_is_an_action(self):
        assert categorize_template("odd", template("FETCH")) is TemplateCategory.ACTION
        assert categorize_template("odd", {"title": "No method"}) is TemplateCategory.ACTION

    def test_untyped_property_is_visible(self):
        assert categorize_template("search", template("GET", [{"name": "q"}])) is TemplateCategory.FORM


class TestPropertySource:
    """Test get_property_source resolution order."""

    def test_explicit_value_wins_for_any_type(self):
        prop = HalTemplateProperty(name="firstName", type="text", value="Ada")
        assert get_property_source(prop) is PropertySource.VALUE

    def test_falsy_value_still_counts_as_value(self):
        """An explicit 0 / empty string / None is a value."""
        for value in (0, "", None, False):
            assert get_property_source(HalTemplateProperty(name="count", value=value)) is PropertySource.VALUE

    def test_array_type_comes_from_selection(self):
        assert get_property_source(HalTemplateProperty(name="targets", type="array")) is PropertySource.SELECTION

    def test_preset_value_wins_over_array_type(self):
        prop = HalTemplateProperty(name="sessionIds", type="array", value=["s1"])
        assert get_property_source(prop) is PropertySource.VALUE

    def test_ids_suffix_comes_from_selection(self):
        assert get_property_source(HalTemplateProperty(name="sessionIds")) is PropertySource.SELECTION

    def test_everything_else_comes_from_form(self):
        assert get_property_source(HalTemplateProperty(name="label", type="text")) is PropertySource.FORM


class TestBuildTemplateData:
    """Test build_template_data across the four data sources."""

    def test_selections_fill_array_property(self):
        bulk_delete = template("DELETE", [{"name": "sessionIds", "type": "array", "required": True}])
        context = TemplateExecutionContext(template=bulk_delete, selections=["id1", "id2"])

        assert build_template_data(context) == {"sessionIds": ["id1", "id2"]}

    def test_required_selection_without_selections_fails(self):
        bulk_delete = template("DELETE", [{"name": "sessionIds", "type": "array", "required": True}])

        with pytest.raises(EmptySelectionError) as exc_info:
            build_template_data(TemplateExecutionContext(template=bulk_delete, selections=[]))

        assert exc_info.value.field == "sessionIds"
        assert exc_info.value.kind == "EmptySelection"
        assert isinstance(exc_info.value, TemplateValidationError)

    def test_optional_selection_is_omitted_when_empty(self):
        bulk = template("POST", [{"name": "tagIds", "type": "array"}])
        assert build_template_data(TemplateExecutionContext(template=bulk)) == {}

    def test_hidden_value_is_sent_verbatim(self):
        next_page = template("POST", [{"name": "pagingInstruction", "type": "hidden", "value": '{"cursor":"abc"}'}])
        assert build_template_data(TemplateExecutionContext(template=next_page)) == {
            "pagingInstruction": '{"cursor":"abc"}'
        }

    def test_falsy_hidden_value_is_sent(self):
        counted = template("POST", [{"name": "count", "type": "hidden", "value": 0}])
        assert build_template_data(TemplateExecutionContext(template=counted)) == {"count": 0}

    def test_form_data_then_resource(self):
        edit = template("PUT", [
            {"name": "firstName", "type": "text", "required": True},
            {"name": "lastName", "type": "text", "required": True},
        ])
        context = TemplateExecutionContext(
            template=edit,
            form_data={"firstName": "Grace"},
            resource={"firstName": "Ada", "lastName": "Lovelace"},
        )

        assert build_template_data(context) == {"firstName": "Grace", "lastName": "Lovelace"}

    def test_present_but_falsy_form_value_is_kept(self):
        """Key presence decides, not truthiness."""
        edit = template("PUT", [{"name": "nickname", "type": "text", "required": True}])
        context = TemplateExecutionContext(template=edit, form_data={"nickname": ""}, resource={"nickname": "x"})

        assert build_template_data(context) == {"nickname": ""}

    def test_missing_required_form_field_fails(self):
        create = template("POST", [{"name": "label", "type": "text", "required": True}])

        with pytest.raises(MissingRequiredFieldError) as exc_info:
            build_template_data(TemplateExecutionContext(template=create, form_data={}))

        assert exc_info.value.field == "label"
        assert exc_info.value.kind == "MissingRequiredField"

    def test_read_only_properties_are_skipped(self):
        edit = template("PUT", [
            {"name": "role", "type": "select", "readOnly": True, "value": 3},
            {"name": "firstName", "type": "text", "value": "Ada"},
        ])
        assert build_template_data(TemplateExecutionContext(template=edit)) == {"firstName": "Ada"}

    def test_optional_form_field_without_value_is_omitted(self):
        search = template("GET", [{"name": "q", "type": "text"}])
        assert build_template_data(TemplateExecutionContext(template=search, form_data={})) == {}

    def test_declaration_order_is_preserved(self):
        form = template("POST", [
            {"name": "b", "value": 2},
            {"name": "a", "value": 1},
        ])
        assert list(build_template_data(TemplateExecutionContext(template=form))) == ["b", "a"]


class TestConfirmation:
    """Test get_confirmation_config dialog text."""

    def test_bulk_delete_message_counts_items(self):
        bulk_delete = template("DELETE", [{"name": "sessionIds", "type": "array"}], title="Delete Selected Sessions")
        config = get_confirmation_config(
            bulk_delete, TemplateExecutionContext(template=bulk_delete, selections=["a", "b", "c"])
        )

        assert config.message == "Are you sure you want to delete 3 items? This action cannot be undone."
        assert config.title == "Delete Selected Sessions"
        assert config.confirm_label == "Delete"
        assert config.variant == "destructive"

    def test_single_selection_uses_singular_noun(self):
        bulk_delete = template("DELETE")
        config = get_confirmation_config(bulk_delete, TemplateExecutionContext(template=bulk_delete, selections=["a"]))

        assert config.message == "Are you sure you want to delete 1 item? This action cannot be undone."

    def test_single_delete_without_selection(self):
        delete = template("DELETE", title="Delete Session")
        config = get_confirmation_config(delete, TemplateExecutionContext(template=delete))

        assert config.message == "Are you sure you want to delete this item? This action cannot be undone."

    def test_single_delete_with_empty_selection_list(self):
        delete = template("DELETE", title="Delete Session")
        config = get_confirmation_config(delete, TemplateExecutionContext(template=delete, selections=[]))

        assert config.message == "Are you sure you want to delete this item? This action cannot be undone."
        assert config.variant == "destructive"

    def test_non_delete_with_selection(self):
        archive = template("POST", title="Archive")
        config = get_confirmation_config(archive, TemplateExecutionContext(template=archive, selections=["a", "b"]))

        assert config.message == "Apply this action to 2 items?"
        assert config.confirm_label == "Confirm"
        assert config.variant == "default"

    def test_titled_action_asks_about_title(self):
        revoke = template("POST", title="Revoke Session")
        config = get_confirmation_config(revoke, TemplateExecutionContext(template=revoke))

        assert config.message == "Are you sure you want to Revoke Session?"

    def test_untitled_action_uses_defaults(self):
        action = template("PATCH")
        config = get_confirmation_config(action, TemplateExecutionContext(template=action))

        assert config.title == "Confirm Action"
        assert config.message == "Are you sure you want to continue?"
        assert config.cancel_label == "Cancel"

    def test_lowercase_delete_is_not_destructive(self):
        """The method is compared exactly as sent."""
        delete = template("delete", title="Remove")
        config = get_confirmation_config(delete, TemplateExecutionContext(template=delete))

        assert config.variant == "default"
        assert config.message == "Are you sure you want to Remove?"

    def test_to_dict_uses_wire_names(self):
        delete = template("DELETE")
        config = get_confirmation_config(delete, TemplateExecutionContext(template=delete))

        assert config.to_dict()["confirmLabel"] == "Delete"
        assert config.to_dict()["cancelLabel"] == "Cancel"
