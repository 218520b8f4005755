from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError as SchemaError

from tenantcms.domain.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def schema_errors(exc: SchemaError) -> list:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def parse_body(schema: Type[ModelT]) -> ModelT:
    """Validate the JSON request body against ``schema`` before touching persistence."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    try:
        return schema.model_validate(data)
    except SchemaError as exc:
        raise ValidationError("Validation error", details=schema_errors(exc)) from None
