"""Configuration helpers for the data-format converters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .codecs import CodecOptions

DEFAULT_MAX_INPUT_CHARS = 200_000
ALLOWED_DELIMITERS = (",", ";", "\t", "|")


@dataclass(frozen=True)
class DataConverterSettings:
    max_input_chars: int
    csv_delimiter: str

    def codec_options(self, delimiter: str | None = None) -> CodecOptions:
        return CodecOptions(delimiter=delimiter or self.csv_delimiter)


def load_settings(raw: Mapping[str, object] | None) -> DataConverterSettings:
    raw = raw or {}
    try:
        max_input_chars = int(float(raw.get("max_input_chars", DEFAULT_MAX_INPUT_CHARS)))
    except (TypeError, ValueError):
        max_input_chars = DEFAULT_MAX_INPUT_CHARS
    delimiter = raw.get("csv_delimiter", ",")
    if delimiter not in ALLOWED_DELIMITERS:
        delimiter = ","
    return DataConverterSettings(
        max_input_chars=max(1, max_input_chars),
        csv_delimiter=str(delimiter),
    )


__all__ = [
    "ALLOWED_DELIMITERS",
    "DEFAULT_MAX_INPUT_CHARS",
    "DataConverterSettings",
    "load_settings",
]
