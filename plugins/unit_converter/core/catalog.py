"""Canonical category and unit definitions.

Each category normalises through an implicit base quantity, noted next to the
category. Base units carry the identity law.
"""

from __future__ import annotations

import math

from .laws import IDENTITY, Affine, Linear, Logarithmic, Reciprocal
from .registry import Category, Registry, Unit

# Exact definitions of the international foot, pound, mile and gallons.
FOOT_M = 0.3048
INCH_M = 0.0254
YARD_M = 0.9144
MILE_M = 1609.344
NAUTICAL_MILE_M = 1852.0
POUND_KG = 0.45359237
US_GALLON_L = 3.785411784
UK_GALLON_L = 4.54609
STANDARD_ATMOSPHERE_PA = 101325.0
PSI_PA = 6894.757293168361
ELECTRONVOLT_J = 1.602176634e-19

# L/100km = factor / (distance per volume)
MPG_US_FACTOR = 100 * US_GALLON_L / (MILE_M / 1000)
MPG_UK_FACTOR = 100 * UK_GALLON_L / (MILE_M / 1000)

# Threshold of hearing.
REFERENCE_INTENSITY_W_M2 = 1e-12
REFERENCE_PRESSURE_PA = 2e-5


LENGTH = Category(  # metre
    id="length",
    name="Length",
    description="Convert between different units of length.",
    units=(
        Unit("m", "Metre", IDENTITY),
        Unit("km", "Kilometre", Linear(1000)),
        Unit("cm", "Centimetre", Linear(1, 100)),
        Unit("mm", "Millimetre", Linear(1, 1000)),
        Unit("mi", "Mile", Linear(MILE_M)),
        Unit("yd", "Yard", Linear(YARD_M)),
        Unit("ft", "Foot", Linear(FOOT_M)),
        Unit("in", "Inch", Linear(INCH_M)),
        Unit("nmi", "Nautical Mile", Linear(NAUTICAL_MILE_M)),
    ),
    default_from_unit_id="ft",
    default_to_unit_id="m",
)

MASS = Category(  # kilogram
    id="mass",
    name="Mass",
    description="Convert between different units of mass.",
    units=(
        Unit("kg", "Kilogram", IDENTITY),
        Unit("g", "Gram", Linear(1, 1000)),
        Unit("mg", "Milligram", Linear(1, 1_000_000)),
        Unit("t", "Tonne", Linear(1000)),
        Unit("lb", "Pound", Linear(POUND_KG)),
        Unit("oz", "Ounce", Linear(POUND_KG, 16)),
        Unit("st", "Stone", Linear(POUND_KG * 14)),
    ),
    default_from_unit_id="lb",
    default_to_unit_id="kg",
)

AREA = Category(  # square metre
    id="area",
    name="Area",
    description="Convert between different units of area.",
    units=(
        Unit("sqm", "Square Metre", IDENTITY),
        Unit("sqkm", "Square Kilometre", Linear(1_000_000)),
        Unit("sqft", "Square Foot", Linear(FOOT_M * FOOT_M)),
        Unit("sqin", "Square Inch", Linear(INCH_M * INCH_M)),
        Unit("acre", "Acre", Linear(4046.8564224)),
        Unit("ha", "Hectare", Linear(10_000)),
    ),
)

VOLUME = Category(  # litre
    id="volume",
    name="Volume",
    description="Convert between different units of volume.",
    units=(
        Unit("l", "Litre", IDENTITY),
        Unit("ml", "Millilitre", Linear(1, 1000)),
        Unit("us-gal", "US Gallon", Linear(US_GALLON_L)),
        Unit("uk-gal", "UK Gallon", Linear(UK_GALLON_L)),
        Unit("m3", "Cubic Metre", Linear(1000)),
        Unit("us-cup", "US Cup", Linear(US_GALLON_L, 16)),
        Unit("us-floz", "US Fluid Ounce", Linear(US_GALLON_L, 128)),
    ),
)

TEMPERATURE = Category(  # degree Celsius
    id="temperature",
    name="Temperature",
    description="Convert between different units of temperature.",
    units=(
        Unit("c", "Celsius", IDENTITY),
        Unit("f", "Fahrenheit", Affine(-32, 5, 9)),
        Unit("k", "Kelvin", Affine(-273.15)),
        Unit("r", "Rankine", Affine(-491.67, 5, 9)),
    ),
    default_from_unit_id="c",
    default_to_unit_id="f",
)

SPEED = Category(  # metre per second
    id="speed",
    name="Speed",
    description="Convert between different units of speed.",
    units=(
        Unit("m-s", "Metre per Second", IDENTITY),
        Unit("km-h", "Kilometre per Hour", Linear(1000, 3600)),
        Unit("mph", "Mile per Hour", Linear(MILE_M, 3600)),
        Unit("kn", "Knot", Linear(NAUTICAL_MILE_M, 3600)),
        Unit("ft-s", "Foot per Second", Linear(FOOT_M)),
    ),
    default_from_unit_id="km-h",
    default_to_unit_id="mph",
)

TIME = Category(  # second
    id="time",
    name="Time",
    description="Convert between different units of time.",
    units=(
        Unit("s", "Second", IDENTITY),
        Unit("ms", "Millisecond", Linear(1, 1000)),
        Unit("min", "Minute", Linear(60)),
        Unit("h", "Hour", Linear(3600)),
        Unit("d", "Day", Linear(86_400)),
        Unit("wk", "Week", Linear(604_800)),
    ),
    default_from_unit_id="h",
    default_to_unit_id="min",
)

PRESSURE = Category(  # pascal
    id="pressure",
    name="Pressure",
    description="Convert between different units of pressure.",
    units=(
        Unit("pa", "Pascal", IDENTITY),
        Unit("kpa", "Kilopascal", Linear(1000)),
        Unit("bar", "Bar", Linear(100_000)),
        Unit("mbar", "Millibar", Linear(100)),
        Unit("psi", "Pound per Square Inch", Linear(PSI_PA)),
        Unit("atm", "Standard Atmosphere", Linear(STANDARD_ATMOSPHERE_PA)),
        Unit("mmhg", "Millimetre of Mercury", Linear(STANDARD_ATMOSPHERE_PA, 760)),
    ),
    default_from_unit_id="bar",
    default_to_unit_id="psi",
)

ENERGY = Category(  # joule
    id="energy",
    name="Energy",
    description="Convert between different units of energy.",
    units=(
        Unit("j", "Joule", IDENTITY),
        Unit("kj", "Kilojoule", Linear(1000)),
        Unit("cal", "Calorie", Linear(4.184)),
        Unit("kcal", "Kilocalorie", Linear(4184)),
        Unit("wh", "Watt-hour", Linear(3600)),
        Unit("kwh", "Kilowatt-hour", Linear(3_600_000)),
        Unit("ev", "Electronvolt", Linear(ELECTRONVOLT_J)),
    ),
    default_from_unit_id="kcal",
    default_to_unit_id="kj",
)

DIGITAL_STORAGE = Category(  # byte
    id="digital-storage",
    name="Digital Storage",
    description="Convert between decimal and binary units of digital storage.",
    units=(
        Unit("byte", "Byte", IDENTITY),
        Unit("bit", "Bit", Linear(1, 8)),
        Unit("kb", "Kilobyte", Linear(1000)),
        Unit("mb", "Megabyte", Linear(1000**2)),
        Unit("gb", "Gigabyte", Linear(1000**3)),
        Unit("kib", "Kibibyte", Linear(1024)),
        Unit("mib", "Mebibyte", Linear(1024**2)),
        Unit("gib", "Gibibyte", Linear(1024**3)),
    ),
    default_from_unit_id="gb",
    default_to_unit_id="gib",
)

FUEL_CONSUMPTION = Category(  # litres per 100 kilometres
    id="fuel-consumption",
    name="Fuel Consumption",
    description="Convert between fuel economy and fuel consumption figures.",
    units=(
        Unit("l-p100km", "Litres per 100 km", IDENTITY),
        Unit("km-pl", "Kilometres per Litre", Reciprocal(100)),
        Unit("mpg", "Miles per Gallon (US)", Reciprocal(MPG_US_FACTOR)),
        Unit("mpg-uk", "Miles per Gallon (UK)", Reciprocal(MPG_UK_FACTOR)),
    ),
    default_from_unit_id="mpg",
    default_to_unit_id="l-p100km",
)

SOUND_LEVEL = Category(  # decibel
    id="sound-level",
    name="Sound Level",
    description="Convert between sound levels and the intensities or pressures behind them.",
    units=(
        Unit("db", "Decibel", IDENTITY),
        Unit("b", "Bel", Linear(10)),
        Unit("np", "Neper", Linear(20 / math.log(10))),
        Unit("w-m2", "Sound Intensity (W/m²)", Logarithmic(REFERENCE_INTENSITY_W_M2, 10)),
        Unit("pa", "Sound Pressure (Pa)", Logarithmic(REFERENCE_PRESSURE_PA, 20)),
    ),
    default_from_unit_id="db",
    default_to_unit_id="w-m2",
)

ANGLE = Category(  # degree
    id="angle",
    name="Angle",
    description="Convert between different units of plane angle.",
    units=(
        Unit("deg", "Degree", IDENTITY),
        Unit("rad", "Radian", Linear(180, math.pi)),
        Unit("grad", "Gradian", Linear(9, 10)),
        Unit("arcmin", "Arcminute", Linear(1, 60)),
        Unit("arcsec", "Arcsecond", Linear(1, 3600)),
        Unit("turn", "Turn", Linear(360)),
    ),
)

CATEGORIES: tuple[Category, ...] = (
    LENGTH,
    MASS,
    AREA,
    VOLUME,
    TEMPERATURE,
    SPEED,
    TIME,
    PRESSURE,
    ENERGY,
    DIGITAL_STORAGE,
    FUEL_CONSUMPTION,
    SOUND_LEVEL,
    ANGLE,
)


def build_registry() -> Registry:
    return Registry(CATEGORIES)


__all__ = ["CATEGORIES", "build_registry"]
