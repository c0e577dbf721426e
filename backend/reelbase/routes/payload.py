"""
Reelbase Backend — Request Body Parsing
=========================================

What:  Reads a request body as a flat dict whether it arrived as JSON or as
       an HTML form, and coerces it into a pydantic model.
Who:   Movie routes, which serve both API clients (JSON) and the add/edit
       forms of the HTML views (application/x-www-form-urlencoded).
"""

import json
from typing import Any, Dict, Type, TypeVar

import pydantic
from starlette.requests import Request

from reelbase.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def is_form_request(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() in FORM_CONTENT_TYPES


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Body as a dict. Empty bodies give {}.

    Raises:
        ValidationError: Body is not JSON, or JSON but not an object
    """
    if is_form_request(request):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ValidationError(message="Malformed JSON body", detail=str(e))
    if not isinstance(data, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            detail=f"Got {type(data).__name__}",
        )
    return data


def parse_model(model: Type[ModelT], payload: Dict[str, Any], message: str) -> ModelT:
    """Validate `payload` into `model`, reporting failures under `message`."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            message=message,
            detail=str(e),
            field=fields[0] if fields else None,
            context={"fields": fields},
        )
