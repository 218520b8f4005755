from typing import ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Request bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class PartialUpdate(RequestModel):
    """All fields optional, but the ones in ``NOT_NULLABLE`` may not be sent as null."""

    NOT_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.NOT_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
