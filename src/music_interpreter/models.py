"""Pydantic models for validating raw console input."""

from typing import List

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .expressions import MAX_REPEAT_COUNT, VALID_NOTES


class NoteInput(BaseModel):
    """A note letter typed by the user."""

    note: str = Field(..., description="Note letter (C, D, E, F, G, A, B)")

    @field_validator("note")
    @classmethod
    def normalize_note(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Note name cannot be empty")
        if value.upper() not in VALID_NOTES:
            raise ValueError(
                f"Invalid note: {value}. Valid notes are: {', '.join(VALID_NOTES)}"
            )
        return value.upper()


class SaveNameInput(BaseModel):
    """Name to save an expression under."""

    name: str = Field(..., description="Library name for the expression")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Save name cannot be empty")
        return value


class NamesInput(BaseModel):
    """Expression names referenced by a sequence or chord."""

    names: List[str] = Field(..., description="Names of saved expressions")

    @field_validator("names", mode="before")
    @classmethod
    def split_names(cls, value):
        """Accept a comma-separated string or a list of names."""
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            raise ValueError("Names must be a comma-separated string or a list")
        names = [str(name).strip() for name in value]
        names = [name for name in names if name]
        if not names:
            raise ValueError("At least one expression name is required")
        return names


class RepeatCountInput(BaseModel):
    """Repeat count typed by the user.

    The upper limit comes from the ``max_count`` validation context and
    defaults to MAX_REPEAT_COUNT.
    """

    count: int = Field(..., description="Number of repetitions")

    @field_validator("count", mode="before")
    @classmethod
    def parse_count(cls, value, info: ValidationInfo) -> int:
        if isinstance(value, bool):
            raise ValueError("Repeat count must be a positive number")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise ValueError("Repeat count must be a positive number") from None
        if not isinstance(value, int) or value <= 0:
            raise ValueError("Repeat count must be a positive number")

        limit = MAX_REPEAT_COUNT
        if info.context and info.context.get("max_count") is not None:
            limit = min(int(info.context["max_count"]), MAX_REPEAT_COUNT)
        if value > limit:
            raise ValueError(f"Repeat count cannot exceed {limit}")
        return value


def validation_message(error: ValidationError) -> str:
    """Get a readable message from the first error of a ValidationError.

    Args:
        error: Error raised by a model

    Returns:
        The message without pydantic's "Value error, " prefix
    """
    errors = error.errors()
    if not errors:
        return str(error)
    message = errors[0].get("msg", str(error))
    prefix = "Value error, "
    if message.startswith(prefix):
        message = message[len(prefix):]
    return message
