"""
Request validation and the structured 400 response.

Body and query-string problems are collected per field, the way a model
state would be, and returned before any service or repository runs:

    {"StatusCode": 400, "Content": {"projectName": ["Field required"]},
     "Message": "Invalid input data!", "DateTime": "..."}
"""

from datetime import datetime

from flask import Flask, jsonify, request
from pydantic import BaseModel, ValidationError

INVALID_INPUT_MESSAGE = "Invalid input data!"


class ModelStateError(Exception):
    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(INVALID_INPUT_MESSAGE)
        self.errors = errors


def model_state(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.setdefault(field, []).append(err["msg"])
    return errors


def validate_body(schema: type[BaseModel]):
    data = request.get_json(silent=True)
    if data is None:
        raise ModelStateError({"body": ["A JSON body is required."]})
    return schema.model_validate(data)


def int_arg(name: str, default: int | None = None) -> int:
    raw = request.args.get(name, "").strip()
    if not raw:
        if default is not None:
            return default
        raise ModelStateError({name: ["The value is required."]})
    try:
        return int(raw)
    except ValueError:
        raise ModelStateError({name: [f"The value '{raw}' is not valid."]}) from None


def validation_response(errors: dict[str, list[str]]):
    body = {
        "StatusCode": 400,
        "Content": errors,
        "Message": INVALID_INPUT_MESSAGE,
        "DateTime": datetime.now().isoformat(),
    }
    return jsonify(body), 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ModelStateError)
    def handle_model_state(exc: ModelStateError):
        return validation_response(exc.errors)

    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        return validation_response(model_state(exc))
