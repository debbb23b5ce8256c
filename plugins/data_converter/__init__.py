"""Data-format converter plugin."""

manifest = {
    "title": "Data Converter",
    "summary": "Convert between JSON, YAML, XML and CSV, encode or decode Base64 and URL text, and guess pasted formats.",
    "blueprint": "data_converter",
    "category": "Data Converters",
    "api": "/api/data_converter",
}


__all__ = ["manifest"]
