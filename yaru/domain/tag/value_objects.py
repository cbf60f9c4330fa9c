"""Tag value objects."""

from pydantic import field_validator

from yaru.domain.shared.value_object import Identifier, RuleViolation, ValueObject

TAG_NAME_MAX_LENGTH = 50


class TagId(Identifier):
    """Persistence-assigned tag identifier."""


class TagName(ValueObject):
    """Tag name: non-blank, at most 50 characters.

    The value is stored exactly as given; only the blank check trims.
    """

    value: str

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if not v.strip():
            raise RuleViolation("empty", "tag name must not be empty")
        if len(v) > TAG_NAME_MAX_LENGTH:
            raise RuleViolation(
                "too_long",
                f"tag name must be at most {TAG_NAME_MAX_LENGTH} characters, got {len(v)}",
            )
        return v


class TagDescription(ValueObject):
    """Free-form tag description. Empty means "no description"."""

    value: str = ""

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    def as_optional(self) -> str | None:
        return None if self.is_empty else self.value
