"""Unit converter API with standardized responses."""

from __future__ import annotations

from typing import Literal

import pydantic
from flask import Blueprint, Response, current_app, request

from common.errors import (
    AppError,
    NotFoundAppError,
    UnprocessableAppError,
    ValidationAppError,
)
from common.responses import fail, ok
from common.validation import (
    SchemaModel,
    TextLimit,
    ValidationError,
    enforce_text_limit,
    parse_model,
)

from ..core import (
    ConversionError,
    ConversionErrorKind,
    ConversionSession,
    convert,
    format_number,
    get_category,
    get_registry,
    load_settings,
    parse_number,
)


class ConvertPayload(SchemaModel):
    category: str
    from_unit: str
    to_unit: str
    value: float | int | str


class SessionState(SchemaModel):
    # Field text is echoed back exactly as typed.
    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=False)

    category: str
    from_unit: str | None = None
    to_unit: str | None = None
    from_value: str = "1"
    to_value: str = ""
    last_edited: Literal["from", "to"] = "from"


class SessionPayload(SchemaModel):
    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=False)

    state: SessionState
    action: Literal["edit_from", "edit_to", "change_from_unit", "change_to_unit", "swap"]
    text: str | None = None
    unit: str | None = None


api_bp = Blueprint("unit_converter_api", __name__, url_prefix="/api/unit_converter")


def _settings():
    return load_settings(
        current_app.config.get("PLUGIN_SETTINGS", {}).get("unit_converter")
    )


def _app_error(error: ConversionError) -> AppError:
    if error.kind is ConversionErrorKind.NOT_FOUND:
        return NotFoundAppError(message=error.message, code="unit.not_found")
    if error.kind is ConversionErrorKind.NON_FINITE_RESULT:
        return UnprocessableAppError(message=error.message, code="unit.non_finite_result")
    return ValidationAppError(message=error.message, code="unit.invalid_number")


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="unit.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


@api_bp.get("/categories")
def categories() -> Response:
    query = request.args.get("q", "")
    found = [category.summary() for category in get_registry().search(query)]
    return ok(
        {"categories": found, "default_category": _settings().default_category},
        meta={"query": query} if query else None,
    )


@api_bp.get("/categories/<category_id>")
def category_detail(category_id: str) -> Response:
    category = get_category(category_id)
    if category is None:
        return fail(
            NotFoundAppError(message=f"No category '{category_id}'.", code="unit.not_found")
        )
    return ok(category.to_dict())


@api_bp.post("/convert")
def convert_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ConvertPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    value = payload.value
    if isinstance(value, str):
        try:
            enforce_text_limit(value, TextLimit(_settings().max_value_chars), field="value")
        except ValidationError as exc:
            return _invalid_request(exc)
        value = parse_number(value)
        if isinstance(value, ConversionError):
            return fail(_app_error(value))

    result = convert(payload.category, payload.from_unit, payload.to_unit, value)
    if isinstance(result, ConversionError):
        return fail(_app_error(result))
    return ok(
        {
            "value": result,
            "formatted": format_number(result),
            "unit": payload.to_unit,
        }
    )


@api_bp.get("/session/<category_id>")
def session_start(category_id: str) -> Response:
    category = get_category(category_id)
    if category is None:
        return fail(
            NotFoundAppError(message=f"No category '{category_id}'.", code="unit.not_found")
        )
    return ok(ConversionSession(category).snapshot())


@api_bp.post("/session")
def session_step() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(SessionPayload, raw_payload)
        limit = TextLimit(_settings().max_value_chars)
        for field_name in ("from_value", "to_value"):
            enforce_text_limit(getattr(payload.state, field_name), limit, field=field_name)
        if payload.text is not None:
            enforce_text_limit(payload.text, limit, field="text")
    except ValidationError as exc:
        return _invalid_request(exc)

    state = payload.state
    category = get_category(state.category)
    if category is None:
        return fail(
            NotFoundAppError(message=f"No category '{state.category}'.", code="unit.not_found")
        )
    session = ConversionSession.restore(
        category,
        from_unit_id=state.from_unit,
        to_unit_id=state.to_unit,
        from_value_text=state.from_value,
        to_value_text=state.to_value,
        last_edited=state.last_edited,
    )

    error: ConversionError | None = None
    if payload.action in ("edit_from", "edit_to"):
        if payload.text is None:
            return fail(
                ValidationAppError(
                    message=f"Action '{payload.action}' requires 'text'.",
                    code="unit.invalid_request",
                )
            )
        getattr(session, payload.action)(payload.text)
    elif payload.action in ("change_from_unit", "change_to_unit"):
        if payload.unit is None:
            return fail(
                ValidationAppError(
                    message=f"Action '{payload.action}' requires 'unit'.",
                    code="unit.invalid_request",
                )
            )
        error = getattr(session, payload.action)(payload.unit)
    else:
        session.swap()

    if error is not None:
        return fail(_app_error(error))
    return ok(session.snapshot())


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "categories",
    "category_detail",
    "convert_endpoint",
    "session_start",
    "session_step",
]
