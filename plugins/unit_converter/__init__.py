"""Unit converter plugin."""

manifest = {
    "title": "Unit Converter",
    "summary": "Two-way unit conversions across length, mass, temperature, fuel consumption, sound level and more.",
    "blueprint": "unit_converter",
    "category": "Unit Converters",
    "api": "/api/unit_converter",
}


__all__ = ["manifest"]
