from typing import Any, Dict, List, Type, TypeVar, Union
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

# Exceptions
from omniconsole.exceptions.console_exception import ValidationException

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(error: Union[ValidationError, RequestValidationError]) -> List[Dict[str, Any]]:
    return [
        {
            "path": ".".join(str(part) for part in item["loc"]),
            "message": item["msg"],
            "type": item["type"],
        }
        for item in error.errors()
    ]


def validate_payload(model: Type[ModelT], payload: Any, entity_name: str) -> ModelT:
    """
    Validate a raw request body against a request model.
    Raises ValidationException("Invalid <entity> data") with per-field errors.
    """
    if not isinstance(payload, dict):
        raise ValidationException(
            message=f"Invalid {entity_name} data",
            errors=[{"path": "", "message": "Request body must be a JSON object", "type": "dict_type"}]
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ValidationException(message=f"Invalid {entity_name} data", errors=format_validation_errors(e))
