"""Tests for declarative application form validation."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.forms import (
    FieldKind,
    FormField,
    check_form_fields,
    parse_form_config,
    validate_form_data,
)


@pytest.fixture
def fields():
    return parse_form_config([
        {"id": "portfolio", "type": "text", "label": "Portfolio URL", "required": True},
        {"id": "contact-email", "type": "email", "label": "Contact email"},
        {"id": "phone", "type": "phone", "label": "Phone"},
        {
            "id": "seniority",
            "type": "select",
            "label": "Seniority",
            "required": True,
            "options": ["junior", "senior"],
        },
        {
            "id": "languages",
            "type": "multiselect",
            "label": "Languages",
            "options": ["python", "go", "rust"],
            "validation": {"max": 2},
        },
        {"id": "relocate", "type": "checkbox", "label": "Willing to relocate"},
        {
            "id": "motivation",
            "type": "textarea",
            "label": "Why us?",
            "validation": {"min": 10, "max": 200},
        },
    ])


def test_valid_answers(fields):
    cleaned = validate_form_data(fields, {
        "portfolio": "https://ada.dev",
        "contact-email": "ada@example.com",
        "seniority": "senior",
        "languages": ["python"],
        "relocate": True,
        "unknown": "dropped",
    })

    assert cleaned["portfolio"] == "https://ada.dev"
    assert cleaned["seniority"] == "senior"
    assert cleaned["languages"] == ["python"]
    assert cleaned["relocate"] is True
    assert "unknown" not in cleaned


def test_missing_required_fields_are_reported(fields):
    with pytest.raises(ValidationError) as exc_info:
        validate_form_data(fields, {})

    failing = {error["field"] for error in exc_info.value.details}
    assert failing == {"portfolio", "seniority"}


@pytest.mark.parametrize("answers,field", [
    ({"contact-email": "not-an-email"}, "contact-email"),
    ({"phone": "call me maybe"}, "phone"),
    ({"seniority": "principal"}, "seniority"),
    ({"languages": ["python", "go", "rust"]}, "languages"),
    ({"languages": ["cobol"]}, "languages.0"),
    ({"motivation": "too short"}, "motivation"),
])
def test_invalid_answers(fields, answers, field):
    base = {"portfolio": "https://ada.dev", "seniority": "junior"}
    with pytest.raises(ValidationError) as exc_info:
        validate_form_data(fields, {**base, **answers})

    assert field in {error["field"] for error in exc_info.value.details}


def test_checkbox_defaults_to_false(fields):
    cleaned = validate_form_data(fields, {"portfolio": "x", "seniority": "junior"})
    assert cleaned["relocate"] is False


def test_no_fields_passes_data_through():
    assert validate_form_data([], {"anything": 1}) == {"anything": 1}
    assert validate_form_data([], None) == {}


def test_choice_fields_need_options():
    with pytest.raises(PydanticValidationError):
        FormField.model_validate({"id": "team", "type": "radio", "label": "Team"})


def test_type_alias_and_kind():
    field = FormField.model_validate({"id": " cv ", "type": "file", "label": "CV"})
    assert field.kind == FieldKind.FILE
    assert field.id == "cv"


def test_invalid_stored_config():
    with pytest.raises(ValidationError):
        parse_form_config([{"id": "x", "type": "slider", "label": "X"}])
    assert parse_form_config(None) == []


@pytest.mark.parametrize("pattern", ["(", r"^(?=.*\d).+$"])
def test_uncompilable_pattern_is_rejected(pattern):
    fields = parse_form_config([
        {"id": "handle", "type": "text", "label": "Handle", "validation": {"pattern": pattern}},
    ])

    with pytest.raises(ValueError, match="Unsupported form validation rule"):
        check_form_fields(fields)
    with pytest.raises(ValidationError):
        validate_form_data(fields, {"handle": "x1"})


def test_duplicate_field_ids_are_rejected():
    fields = parse_form_config([
        {"id": "q", "type": "text", "label": "First"},
        {"id": "q", "type": "textarea", "label": "Second"},
    ])
    with pytest.raises(ValueError, match="Duplicate form field id 'q'"):
        check_form_fields(fields)


def test_supported_pattern_passes(fields):
    assert check_form_fields(fields) is fields
