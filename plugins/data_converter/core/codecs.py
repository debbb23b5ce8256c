"""Text codecs behind the data-format converters.

Every codec takes the raw input text and returns the converted text. Parse
failures raise :class:`DataConversionError` carrying a message fit for display.
"""

from __future__ import annotations

import base64
import binascii
import csv
import io
import json
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Callable, Dict, List
from urllib.parse import quote, unquote

import yaml
from yaml.composer import ComposerError

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-~".
URI_COMPONENT_SAFE = "!*'()"
XML_ROOT_TAG = "root"
XML_ITEM_TAG = "item"

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_XML_NAME_INVALID = re.compile(r"[^A-Za-z0-9_.\-]")


class DataConversionError(ValueError):
    """Raised when the input cannot be read in the source format."""


@dataclass(frozen=True)
class CodecOptions:
    delimiter: str = ","


Codec = Callable[[str, CodecOptions], str]


def _structured(codec: Codec) -> Codec:
    """Blank input to a structured-format codec converts to blank output."""

    def wrapper(text: str, options: CodecOptions) -> str:
        if not text.strip():
            return ""
        return codec(text, options)

    wrapper.__name__ = codec.__name__
    wrapper.__doc__ = codec.__doc__
    return wrapper


class _NoAliasLoader(yaml.SafeLoader):
    """Safe loader that rejects alias nodes (``*name``)."""

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            raise ComposerError(
                None, None, "aliases are not supported", event.start_mark
            )
        return super().compose_node(parent, index)


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataConversionError(f"Invalid JSON: {exc}") from exc


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


# ---- JSON / YAML ---------------------------------------------------------
@_structured
def json_to_yaml(text: str, options: CodecOptions) -> str:
    data = _load_json(text)
    dumped = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    # Scalars come back with a document end marker.
    return dumped.removesuffix("...\n").rstrip("\n")


@_structured
def yaml_to_json(text: str, options: CodecOptions) -> str:
    try:
        data = yaml.load(text, Loader=_NoAliasLoader)
    except yaml.YAMLError as exc:
        raise DataConversionError(f"Invalid YAML: {exc}") from exc
    return _dump_json(data)


# ---- JSON / XML ----------------------------------------------------------
def _xml_tag(name: object) -> str:
    tag = _XML_NAME_INVALID.sub("_", str(name)) or "_"
    if not (tag[0].isalpha() or tag[0] == "_"):
        tag = f"_{tag}"
    return tag


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill_element(element: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child_value in value.items():
            if isinstance(child_value, list):
                for item in child_value:
                    _fill_element(ET.SubElement(element, _xml_tag(key)), item)
            else:
                _fill_element(ET.SubElement(element, _xml_tag(key)), child_value)
    elif isinstance(value, list):
        for item in value:
            _fill_element(ET.SubElement(element, XML_ITEM_TAG), item)
    elif value is not None:
        element.text = _xml_text(value)


@_structured
def json_to_xml(text: str, options: CodecOptions) -> str:
    data = _load_json(text)
    if isinstance(data, dict) and len(data) == 1:
        key, value = next(iter(data.items()))
        if not isinstance(value, list):
            root = ET.Element(_xml_tag(key))
            _fill_element(root, value)
            ET.indent(root)
            return ET.tostring(root, encoding="unicode")
    root = ET.Element(XML_ROOT_TAG)
    _fill_element(root, data)
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")


def _element_value(element: ET.Element) -> Any:
    children = list(element)
    text = (element.text or "").strip()
    if not children and not element.attrib:
        return text or None
    result: Dict[str, Any] = {f"@{name}": value for name, value in element.attrib.items()}
    for child in children:
        child_value = _element_value(child)
        if child.tag in result:
            existing = result[child.tag]
            if not isinstance(existing, list):
                result[child.tag] = existing = [existing]
            existing.append(child_value)
        else:
            result[child.tag] = child_value
    if text:
        result["#text"] = text
    return result


@_structured
def xml_to_json(text: str, options: CodecOptions) -> str:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise DataConversionError(f"Invalid XML: {exc}") from exc
    return _dump_json({root.tag: _element_value(root)})


# ---- JSON / CSV ----------------------------------------------------------
@_structured
def csv_to_json(text: str, options: CodecOptions) -> str:
    reader = csv.DictReader(io.StringIO(text), delimiter=options.delimiter)
    rows: List[Dict[str, Any]] = []
    try:
        for row in reader:
            if None in row:
                raise DataConversionError(
                    f"Invalid CSV: line {reader.line_num} has more fields than the header."
                )
            rows.append(row)
    except csv.Error as exc:
        raise DataConversionError(f"Invalid CSV: {exc}") from exc
    return _dump_json(rows)


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return _xml_text(value)


@_structured
def json_to_csv(text: str, options: CodecOptions) -> str:
    data = _load_json(text)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise DataConversionError("JSON to CSV expects an object or an array of objects.")
    header: List[str] = []
    for row in data:
        for key in row:
            if key not in header:
                header.append(key)
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=header, delimiter=options.delimiter, lineterminator="\n"
    )
    writer.writeheader()
    for row in data:
        writer.writerow({key: _csv_cell(row.get(key)) for key in header})
    return buffer.getvalue().rstrip("\n")


# ---- Base64 / URL --------------------------------------------------------
def base64_encode(text: str, options: CodecOptions) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(text: str, options: CodecOptions) -> str:
    compact = "".join(text.split())
    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise DataConversionError("Invalid Base64 string.") from exc


def url_encode(text: str, options: CodecOptions) -> str:
    return quote(text, safe=URI_COMPONENT_SAFE)


def url_decode(text: str, options: CodecOptions) -> str:
    if _MALFORMED_ESCAPE.search(text):
        raise DataConversionError("Invalid URL-encoded string.")
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError as exc:
        raise DataConversionError("Invalid URL-encoded string.") from exc


__all__ = [
    "Codec",
    "CodecOptions",
    "DataConversionError",
    "base64_decode",
    "base64_encode",
    "csv_to_json",
    "json_to_csv",
    "json_to_xml",
    "json_to_yaml",
    "url_decode",
    "url_encode",
    "xml_to_json",
    "yaml_to_json",
]
