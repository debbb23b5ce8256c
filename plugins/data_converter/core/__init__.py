"""Registry of data-format converters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .codecs import (
    Codec,
    CodecOptions,
    DataConversionError,
    base64_decode,
    base64_encode,
    csv_to_json,
    json_to_csv,
    json_to_xml,
    json_to_yaml,
    url_decode,
    url_encode,
    xml_to_json,
    yaml_to_json,
)
from .detect import UNKNOWN, FormatGuess, detect_format
from .settings import ALLOWED_DELIMITERS, DataConverterSettings, load_settings


@dataclass(frozen=True)
class DataConverter:
    id: str
    name: str
    description: str
    codec: Codec

    def convert(self, text: str, options: CodecOptions | None = None) -> str:
        return self.codec(text, options or CodecOptions())

    def summary(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


DATA_CONVERTERS: tuple[DataConverter, ...] = (
    DataConverter("json-to-yaml", "JSON to YAML", "Convert JSON data to YAML format.", json_to_yaml),
    DataConverter("yaml-to-json", "YAML to JSON", "Convert YAML data to JSON format.", yaml_to_json),
    DataConverter("json-to-xml", "JSON to XML", "Convert JSON data to an XML document.", json_to_xml),
    DataConverter("xml-to-json", "XML to JSON", "Convert an XML document to JSON.", xml_to_json),
    DataConverter("csv-to-json", "CSV to JSON", "Convert CSV rows to a JSON array of objects.", csv_to_json),
    DataConverter("json-to-csv", "JSON to CSV", "Convert a JSON array of objects to CSV rows.", json_to_csv),
    DataConverter("base64-encode", "Base64 Encode", "Encode text to Base64.", base64_encode),
    DataConverter("base64-decode", "Base64 Decode", "Decode Base64 to text.", base64_decode),
    DataConverter("url-encode", "URL Encode", "Encode text for use in URLs.", url_encode),
    DataConverter("url-decode", "URL Decode", "Decode URL-encoded text.", url_decode),
)

_BY_ID: Dict[str, DataConverter] = {converter.id: converter for converter in DATA_CONVERTERS}


def find_converter(converter_id: str) -> Optional[DataConverter]:
    return _BY_ID.get(converter_id)


def list_converters() -> List[Dict[str, str]]:
    return [converter.summary() for converter in DATA_CONVERTERS]


def search_converters(query: str, *, include_description: bool = False) -> Iterator[DataConverter]:
    needle = (query or "").strip().lower()
    for converter in DATA_CONVERTERS:
        if needle in converter.name.lower():
            yield converter
        elif include_description and needle in converter.description.lower():
            yield converter


__all__ = [
    "ALLOWED_DELIMITERS",
    "CodecOptions",
    "DATA_CONVERTERS",
    "DataConversionError",
    "DataConverter",
    "DataConverterSettings",
    "FormatGuess",
    "UNKNOWN",
    "detect_format",
    "find_converter",
    "list_converters",
    "load_settings",
    "search_converters",
]
