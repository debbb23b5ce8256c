"""Heuristic format detection for pasted data.

The guess is advisory: callers show it next to the input and never block a
conversion on it.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass
from typing import Dict, Optional

import yaml

CSV_DELIMITERS = (",", ";", "\t")


@dataclass(frozen=True)
class FormatGuess:
    format: Optional[str]
    confidence: Optional[float]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


UNKNOWN = FormatGuess(format=None, confidence=None)


def _looks_like_json(text: str) -> bool:
    if text[0] not in "{[":
        return False
    try:
        return isinstance(json.loads(text), (dict, list))
    except json.JSONDecodeError:
        return False


def _looks_like_xml(text: str) -> bool:
    if not text.startswith("<"):
        return False
    try:
        ET.fromstring(text)
    except ET.ParseError:
        return False
    return True


def _looks_like_yaml(text: str) -> bool:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return False
    return isinstance(data, (dict, list))


def _looks_like_csv(text: str) -> bool:
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        return False
    for delimiter in CSV_DELIMITERS:
        counts = {line.count(delimiter) for line in lines}
        if len(counts) == 1 and counts.pop() > 0:
            return True
    return False


def detect_format(text: str) -> FormatGuess:
    """Guess whether ``text`` is JSON, XML, YAML or CSV."""

    stripped = (text or "").strip()
    if not stripped:
        return UNKNOWN
    if _looks_like_json(stripped):
        return FormatGuess("JSON", 0.95)
    if _looks_like_xml(stripped):
        return FormatGuess("XML", 0.9)
    if _looks_like_yaml(stripped):
        return FormatGuess("YAML", 0.6)
    if _looks_like_csv(stripped):
        return FormatGuess("CSV", 0.5)
    return UNKNOWN


__all__ = ["FormatGuess", "UNKNOWN", "detect_format"]
