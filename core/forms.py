"""
Declarative application forms.

A job describes its application form as a list of fields. Each field kind
maps to a fixed validation rule; `build_form_model` turns the list into a
Pydantic model that validates a candidate's answers.
"""

from enum import Enum as PyEnum
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError as PydanticValidationError,
    create_model,
    field_validator,
    model_validator,
)

from pydantic_core import SchemaError

from core.exceptions import ValidationError

PHONE_PATTERN = r"^\+?[\d\s\-\(\)]+$"


class FieldKind(str, PyEnum):
    """Closed set of supported form field kinds."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"
    FILE = "file"
    CHECKBOX = "checkbox"
    RADIO = "radio"


CHOICE_KINDS = frozenset({FieldKind.SELECT, FieldKind.RADIO, FieldKind.MULTISELECT})


class FieldValidation(BaseModel):
    """Optional per-field constraints."""

    min: Optional[int] = Field(None, ge=0)
    max: Optional[int] = Field(None, ge=0)
    pattern: Optional[str] = None
    file_types: Optional[list[str]] = Field(None, alias="fileTypes")

    model_config = ConfigDict(populate_by_name=True)


class FormField(BaseModel):
    """One field of a job's application form."""

    id: str = Field(min_length=1, max_length=100)
    kind: FieldKind = Field(alias="type")
    label: str = Field(min_length=1, max_length=255)
    placeholder: Optional[str] = None
    required: bool = False
    options: Optional[list[str]] = None
    validation: Optional[FieldValidation] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def choices_need_options(self) -> "FormField":
        if self.kind in CHOICE_KINDS and not self.options:
            raise ValueError(f"Field '{self.id}' of type {self.kind.value} needs options")
        return self


def _string_constraints(field: FormField) -> dict[str, Any]:
    constraints: dict[str, Any] = {}
    rules = field.validation
    if field.required:
        constraints["min_length"] = 1
    if rules:
        if rules.min is not None:
            constraints["min_length"] = max(rules.min, constraints.get("min_length", 0))
        if rules.max is not None:
            constraints["max_length"] = rules.max
        if rules.pattern:
            constraints["pattern"] = rules.pattern
    return constraints


def _annotation_for(field: FormField) -> tuple[Any, Any]:
    """Return (annotation, default) for one field."""
    kind = field.kind

    if kind == FieldKind.CHECKBOX:
        # A checkbox always has a value; required means nothing here
        return bool, False

    if kind == FieldKind.FILE:
        return Optional[str], None

    if kind == FieldKind.MULTISELECT:
        item = Literal[tuple(field.options)]  # type: ignore[misc]
        bounds: dict[str, Any] = {}
        if field.required:
            bounds["min_length"] = 1
        if field.validation:
            if field.validation.min is not None:
                bounds["min_length"] = field.validation.min
            if field.validation.max is not None:
                bounds["max_length"] = field.validation.max
        annotation = Annotated[list[item], Field(**bounds)]
        return annotation, (... if field.required else [])

    if kind in (FieldKind.SELECT, FieldKind.RADIO):
        annotation = Literal[tuple(field.options)]  # type: ignore[misc]
    elif kind == FieldKind.EMAIL:
        annotation = EmailStr
    elif kind == FieldKind.PHONE:
        annotation = Annotated[str, Field(pattern=PHONE_PATTERN, **_string_constraints(field))]
    else:
        annotation = Annotated[str, Field(**_string_constraints(field))]

    if field.required:
        return annotation, ...
    return Optional[annotation], None


def build_form_model(fields: list[FormField], name: str = "ApplicationForm") -> type[BaseModel]:
    """
    Build a validation model from a list of form fields.

    Field ids become aliases, so ids that are not Python identifiers
    ("years-of-experience") still work. Unknown keys in submitted data are
    dropped.
    """
    definitions: dict[str, Any] = {}
    for index, field in enumerate(fields):
        annotation, default = _annotation_for(field)
        definitions[f"field_{index}"] = (
            annotation,
            Field(default, alias=field.id, description=field.label),
        )

    return create_model(
        name,
        __config__=ConfigDict(extra="ignore", populate_by_name=False),
        **definitions,
    )


def check_form_fields(fields: list[FormField]) -> list[FormField]:
    """
    Reject a form definition that could never validate an answer.

    Patterns are compiled by pydantic-core's regex engine, which has no
    look-around or backreferences, so the model is built once up front.

    Raises:
        ValueError: Duplicate field ids or a rule the validator cannot compile
    """
    seen: set[str] = set()
    for field in fields:
        if field.id in seen:
            raise ValueError(f"Duplicate form field id '{field.id}'")
        seen.add(field.id)

    try:
        build_form_model(fields)
    except SchemaError as exc:
        raise ValueError(f"Unsupported form validation rule: {exc}") from exc
    return fields


def parse_form_config(raw: Optional[list[dict[str, Any]]]) -> list[FormField]:
    """Load a stored form configuration."""
    if not raw:
        return []
    try:
        return [FormField.model_validate(item) for item in raw]
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid application form configuration",
            details=_format_errors(exc),
        ) from exc


def validate_form_data(
    fields: list[FormField], data: Optional[dict[str, Any]]
) -> dict[str, Any]:
    """
    Validate answers against a form definition.

    Returns:
        Cleaned answers keyed by field id

    Raises:
        ValidationError: Listing every failing field
    """
    if not fields:
        return dict(data or {})

    try:
        model = build_form_model(fields)
    except SchemaError as exc:
        raise ValidationError(
            "Application form configuration cannot be used",
            details={"reason": str(exc)},
        ) from exc
    try:
        instance = model.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ValidationError(
            "Application form validation failed",
            details=_format_errors(exc),
        ) from exc
    return instance.model_dump(by_alias=True, mode="json")


def _format_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
