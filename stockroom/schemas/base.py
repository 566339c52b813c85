from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from stockroom.core.errors import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, strict=True)]


def _format_errors(exc: PydanticValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "record"
        messages.append("{}: {}".format(location, error.get("msg", "invalid value")))
    return "; ".join(messages)


class RecordModel(BaseModel):
    """Stored record: camelCase on the wire and in the store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Stored, but withheld from API responses.
    private_fields: ClassVar[frozenset] = frozenset({"owner_id"})

    @classmethod
    def build(cls, data: dict[str, Any]):
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(_format_errors(exc)) from exc

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_public(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude=set(self.private_fields))


class PayloadModel(BaseModel):
    """Caller-supplied fields; unknown keys are rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # Keys the repository stamps itself; dropped from input before validation.
    immutable_fields: ClassVar[frozenset] = frozenset(
        {"id", "ownerId", "owner_id", "createdAt", "created_at", "updatedAt", "updated_at"}
    )

    @classmethod
    def build(cls, data: Any):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        cleaned = {key: value for key, value in data.items() if key not in cls.immutable_fields}
        try:
            return cls.model_validate(cleaned)
        except PydanticValidationError as exc:
            raise ValidationError(_format_errors(exc)) from exc

    def supplied(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


__all__ = ["NonEmptyStr", "PayloadModel", "RecordModel"]
