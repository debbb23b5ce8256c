import math

import pytest

from plugins.unit_converter.core import (
    CATEGORIES,
    Category,
    ConversionError,
    ConversionErrorKind,
    IDENTITY,
    Linear,
    Registry,
    RegistryError,
    Unit,
    convert,
    convert_text,
    convert_units,
    format_number,
    get_category,
    get_registry,
    list_categories,
    parse_number,
    search_categories,
)
from plugins.unit_converter.core.laws import LAW_KINDS

ROUND_TRIP_POINTS = (0.0, 1.0, -1.0, 1e-3, 1e6)
ALL_UNITS = [(category, unit) for category in CATEGORIES for unit in category.units]


def _unit_id(param):
    if isinstance(param, Category):
        return param.id
    if isinstance(param, Unit):
        return param.id
    return None


@pytest.mark.parametrize("category,unit", ALL_UNITS, ids=_unit_id)
def test_every_unit_round_trips_through_its_base(category, unit):
    checked = 0
    for x in ROUND_TRIP_POINTS:
        try:
            base = unit.to_base(x)
        except (ArithmeticError, ValueError):
            # Outside the law's domain (reciprocal at 0, logarithm at <= 0).
            assert unit.law.kind in ("reciprocal", "logarithmic")
            continue
        assert math.isclose(unit.from_base(base), x, rel_tol=1e-9, abs_tol=1e-12)
        checked += 1
    assert checked >= 3


@pytest.mark.parametrize("category,unit", ALL_UNITS, ids=_unit_id)
def test_converting_a_unit_to_itself_keeps_the_value(category, unit):
    for x in (0.0, 1.0, -2.5, 1234.5678):
        result = convert_units(category, unit.id, unit.id, x)
        if isinstance(result, ConversionError):
            assert result.kind is ConversionErrorKind.NON_FINITE_RESULT
            assert unit.law.kind in ("reciprocal", "logarithmic")
            continue
        if unit.law.is_identity:
            assert result == x
        else:
            assert math.isclose(result, x, rel_tol=1e-12, abs_tol=1e-9)


@pytest.mark.parametrize("category", CATEGORIES, ids=_unit_id)
def test_conversions_compose_back_to_the_input(category):
    for a in category.units:
        for b in category.units:
            for x in (1.0, 2.5, 100.0):
                there = convert_units(category, b.id, a.id, x)
                assert not isinstance(there, ConversionError)
                back = convert_units(category, a.id, b.id, there)
                assert not isinstance(back, ConversionError)
                assert math.isclose(back, x, rel_tol=1e-9)


def test_every_unit_uses_a_known_law():
    for _, unit in ALL_UNITS:
        assert unit.law.kind in LAW_KINDS
        assert unit.to_dict()["law"]["kind"] == unit.law.kind


def test_every_category_has_one_base_unit_and_valid_defaults():
    for category in CATEGORIES:
        assert category.base_unit is not None
        source, target = category.default_pair()
        assert source.id in category.unit_ids
        assert target.id in category.unit_ids


def test_registry_lookup_and_listing():
    registry = get_registry()
    assert registry is get_registry()
    assert len(registry) == len(CATEGORIES)
    assert registry.find_category("length").name == "Length"
    assert registry.find_category("nope") is None
    assert "length" in registry
    assert "nope" not in registry
    assert get_category("temperature").find_unit("k").name == "Kelvin"
    assert get_category("temperature").find_unit("x") is None
    summaries = list_categories()
    assert [item["id"] for item in summaries] == registry.ids
    assert summaries[0] == {
        "id": "length",
        "name": "Length",
        "description": "Convert between different units of length.",
        "unit_count": 9,
    }


def test_search_is_case_insensitive_ordered_and_restartable():
    registry = get_registry()
    assert [c.id for c in registry.search("TEMP")] == ["temperature"]
    assert [c.id for c in registry.search("")] == registry.ids
    names = [c.id for c in search_categories("e")]
    assert names == [c.id for c in CATEGORIES if "e" in c.name.lower()]
    first = registry.search("mass")
    assert [c.id for c in first] == ["mass"]
    assert list(first) == []
    assert [c.id for c in registry.search("mass")] == ["mass"]
    assert [c.id for c in registry.search("economy")] == []
    assert [c.id for c in registry.search("economy", include_description=True)] == [
        "fuel-consumption"
    ]


def test_registry_rejects_contract_violations():
    with pytest.raises(RegistryError):
        Category("solo", "Solo", "", (Unit("a", "A", IDENTITY),))
    with pytest.raises(RegistryError):
        Category("dup", "Dup", "", (Unit("a", "A", IDENTITY), Unit("a", "A2", Linear(2))))
    with pytest.raises(RegistryError):
        Registry(list(CATEGORIES) + [CATEGORIES[0]])


def test_unknown_defaults_fall_back_to_first_two_units():
    category = Category(
        "pair",
        "Pair",
        "",
        (Unit("a", "A", IDENTITY), Unit("b", "B", Linear(2)), Unit("c", "C", Linear(3))),
        default_from_unit_id="missing",
        default_to_unit_id="c",
    )
    source, target = category.default_pair()
    assert (source.id, target.id) == ("a", "c")


def test_convert_reports_unknown_ids_as_not_found():
    length = get_category("length")
    result = convert_units(length, "m", "bogus-unit", 5)
    assert isinstance(result, ConversionError)
    assert result.kind is ConversionErrorKind.NOT_FOUND
    assert "bogus-unit" in result.message

    missing = convert("bogus-category", "m", "km", 5)
    assert missing.kind is ConversionErrorKind.NOT_FOUND


def test_convert_rejects_non_finite_input():
    for value in (float("nan"), float("inf"), -float("inf")):
        result = convert("length", "m", "km", value)
        assert result.kind is ConversionErrorKind.INVALID_NUMBER


def test_convert_rejects_integers_beyond_float_range():
    huge = 10 ** 400
    result = convert("length", "m", "km", huge)
    assert isinstance(result, ConversionError)
    assert result.kind is ConversionErrorKind.INVALID_NUMBER
    negative = convert_units(get_category("mass"), "kg", "lb", -huge)
    assert negative.kind is ConversionErrorKind.INVALID_NUMBER
    assert convert("length", "m", "cm", 10 ** 3) == 100000.0


def test_fuel_consumption_at_zero_has_no_finite_result():
    result = convert("fuel-consumption", "l-p100km", "mpg", 0)
    assert isinstance(result, ConversionError)
    assert result.kind is ConversionErrorKind.NON_FINITE_RESULT
    assert convert_text(get_category("fuel-consumption"), "l-p100km", "mpg", "0") == ""


def test_fuel_consumption_reciprocals():
    assert convert("fuel-consumption", "mpg", "l-p100km", 30) == pytest.approx(7.84048611)
    assert convert("fuel-consumption", "km-pl", "l-p100km", 20) == pytest.approx(5.0)
    assert convert("fuel-consumption", "mpg", "mpg-uk", 30) == pytest.approx(36.0285, rel=1e-5)


def test_temperature_affine_conversions():
    assert convert("temperature", "c", "f", 100) == 212.0
    assert convert("temperature", "f", "c", 32) == 0.0
    assert convert("temperature", "c", "k", 0) == pytest.approx(273.15)
    assert convert("temperature", "k", "f", 0) == pytest.approx(-459.67)
    assert convert("temperature", "r", "k", 491.67) == pytest.approx(273.15)


def test_sound_level_logarithmic_units():
    assert convert("sound-level", "db", "w-m2", 120) == pytest.approx(1.0)
    assert convert("sound-level", "pa", "db", 1) == pytest.approx(93.9794, rel=1e-5)
    assert convert("sound-level", "b", "db", 3) == pytest.approx(30.0)
    for value in (0, -1):
        result = convert("sound-level", "w-m2", "db", value)
        assert result.kind is ConversionErrorKind.NON_FINITE_RESULT


def test_millibar_divides_on_the_way_back():
    pressure = get_category("pressure")
    mbar = pressure.find_unit("mbar")
    assert mbar.to_base(1.0) == 100.0
    assert mbar.from_base(100.0) == 1.0
    assert mbar.from_base(mbar.to_base(1013.25)) == pytest.approx(1013.25)
    assert convert("pressure", "atm", "mbar", 1) == pytest.approx(1013.25)


def test_parse_number_reads_numeric_prefixes():
    assert parse_number("10") == 10.0
    assert parse_number("  -.5") == -0.5
    assert parse_number("12.") == 12.0
    assert parse_number("1e3") == 1000.0
    assert parse_number("3.5kg") == 3.5
    for text in ("", "   ", "abc", "-", ".", "1e999", "Infinity", "NaN"):
        result = parse_number(text)
        assert isinstance(result, ConversionError), text
        assert result.kind is ConversionErrorKind.INVALID_NUMBER


def test_format_number_precision_policy():
    assert format_number(0.0000001234) == "1.2340e-7"
    assert format_number(-0.0000001234) == "-1.2340e-7"
    assert format_number(3.0) == "3"
    assert format_number(0.0) == "0"
    assert format_number(-42.0) == "-42"
    assert format_number(2.5) == "2.5000000"
    assert format_number(-0.5) == "-0.5000000"
    assert format_number(1234.5) == "1234.5000"
    assert format_number(123456789.25) == "123456789"
    assert format_number(1e-6) == "0.0000010"
    assert format_number(float("nan")) == ""
    assert format_number(float("inf")) == ""


def test_format_number_rounds_ties_away_from_zero():
    assert format_number(1234567.25) == "1234567.3"
    assert format_number(-1234567.25) == "-1234567.3"
    assert format_number(12345678.5) == "12345679"
    assert format_number(0.5) == "0.5000000"


def test_format_number_large_integers():
    assert format_number(1e20) == "100000000000000000000"
    assert format_number(2.0 ** 60) == "1152921504606847000"
    assert format_number(1e21) == "1e+21"
    assert format_number(-1.5e22) == "-1.5e+22"


def test_format_number_keeps_eight_significant_digits():
    for value in (3.14159265, 31.4159265, 314.159265, 3141.59265):
        rendered = format_number(value)
        digits = rendered.replace(".", "").replace("-", "").lstrip("0")
        assert len(digits) == 8, rendered
        assert float(rendered) == pytest.approx(value, rel=1e-7)
