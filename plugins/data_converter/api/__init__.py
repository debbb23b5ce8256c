"""API routes for the data-format converters."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from common.errors import (
    NotFoundAppError,
    PayloadTooLargeAppError,
    UnprocessableAppError,
    ValidationAppError,
)
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import (
    SchemaModel,
    TextLimit,
    ValidationError,
    enforce_text_limit,
    parse_model,
)

from ..core import (
    ALLOWED_DELIMITERS,
    DataConversionError,
    detect_format,
    find_converter,
    list_converters,
    load_settings,
)

logger = get_logger("omniconvert.data_converter")


class ConvertPayload(SchemaModel):
    converter: str
    input: str
    delimiter: str | None = None


class DetectPayload(SchemaModel):
    input: str


api_bp = Blueprint("data_converter_api", __name__, url_prefix="/api/data_converter")


def _settings():
    return load_settings(
        current_app.config.get("PLUGIN_SETTINGS", {}).get("data_converter")
    )


def _parse(model, settings):
    # Codecs read the untouched body; the schema strips whitespace.
    raw_payload = request.get_json(silent=True) or {}
    payload = parse_model(model, raw_payload)
    enforce_text_limit(raw_payload["input"], TextLimit(settings.max_input_chars))
    return payload, raw_payload


def _invalid_request(exc: ValidationError) -> Response:
    details = getattr(exc, "details", None)
    if isinstance(details, dict) and "max_chars" in details:
        return fail(
            PayloadTooLargeAppError(
                message=str(exc), code="data.input_too_large", details=details
            )
        )
    return fail(
        ValidationAppError(message=str(exc), code="data.invalid_request", details=details)
    )


@api_bp.get("/converters")
def converters() -> Response:
    return ok({"converters": list_converters()})


@api_bp.post("/convert")
def convert_endpoint() -> Response:
    settings = _settings()
    try:
        payload, raw_payload = _parse(ConvertPayload, settings)
    except ValidationError as exc:
        return _invalid_request(exc)

    converter = find_converter(payload.converter)
    if converter is None:
        return fail(
            NotFoundAppError(
                message=f"No converter '{payload.converter}'.", code="data.not_found"
            )
        )
    delimiter = raw_payload.get("delimiter") or None
    if delimiter is not None and delimiter not in ALLOWED_DELIMITERS:
        return fail(
            ValidationAppError(
                message=f"Unsupported delimiter {delimiter!r}.",
                code="data.invalid_request",
            )
        )
    try:
        output = converter.convert(raw_payload["input"], settings.codec_options(delimiter))
    except DataConversionError as exc:
        logger.info("Conversion %s failed: %s", converter.id, exc)
        return fail(
            UnprocessableAppError(message=str(exc), code="data.conversion_failed")
        )
    return ok({"converter": converter.id, "output": output})


@api_bp.post("/detect")
def detect_endpoint() -> Response:
    try:
        _, raw_payload = _parse(DetectPayload, _settings())
    except ValidationError as exc:
        return _invalid_request(exc)
    return ok(detect_format(raw_payload["input"]).to_dict())


blueprints = [api_bp]


__all__ = ["blueprints", "converters", "convert_endpoint", "detect_endpoint"]
