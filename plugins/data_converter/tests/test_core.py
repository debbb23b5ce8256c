import json

import pytest

from plugins.data_converter.core import (
    DATA_CONVERTERS,
    UNKNOWN,
    CodecOptions,
    DataConversionError,
    detect_format,
    find_converter,
    list_converters,
    load_settings,
    search_converters,
)


def _run(converter_id, text, **options):
    return find_converter(converter_id).convert(text, CodecOptions(**options))


def test_registry_lists_every_converter_once():
    ids = [item["id"] for item in list_converters()]
    assert ids == [converter.id for converter in DATA_CONVERTERS]
    assert len(set(ids)) == 10
    assert find_converter("json-to-yaml").name == "JSON to YAML"
    assert find_converter("nope") is None


def test_search_matches_names_and_optionally_descriptions():
    assert [c.id for c in search_converters("base64")] == ["base64-encode", "base64-decode"]
    assert [c.id for c in search_converters("URL DEC")] == ["url-decode"]
    assert list(search_converters("document")) == []
    assert [c.id for c in search_converters("document", include_description=True)] == [
        "json-to-xml",
        "xml-to-json",
    ]


def test_json_and_yaml():
    assert _run("json-to-yaml", '{"name": "Ada", "langs": ["py", "js"]}') == (
        "name: Ada\nlangs:\n- py\n- js"
    )
    assert _run("json-to-yaml", "42") == "42"
    assert _run("json-to-yaml", '{"city": "Zürich"}') == "city: Zürich"
    converted = _run("yaml-to-json", "a: 1\nb: [x, y]")
    assert json.loads(converted) == {"a": 1, "b": ["x", "y"]}
    assert converted.startswith('{\n  "a": 1')
    assert json.loads(_run("yaml-to-json", "a: &x 1\nb: 2")) == {"a": 1, "b": 2}


def test_json_to_xml_uses_single_key_as_root():
    assert _run("json-to-xml", '{"person": {"name": "Ada", "active": true}}') == (
        "<person>\n  <name>Ada</name>\n  <active>true</active>\n</person>"
    )
    assert _run("json-to-xml", "[1, 2]") == "<root>\n  <item>1</item>\n  <item>2</item>\n</root>"
    assert _run("json-to-xml", '{"1st": "x", "b": null}') == "<root>\n  <_1st>x</_1st>\n  <b />\n</root>"


def test_xml_to_json_keeps_attributes_and_repeated_children():
    converted = _run("xml-to-json", '<a x="1"><b>2</b><b>3</b><c>hi</c></a>')
    assert json.loads(converted) == {"a": {"@x": "1", "b": ["2", "3"], "c": "hi"}}


def test_csv_and_json():
    assert json.loads(_run("csv-to-json", "name,age\nAda,36\nAlan,41")) == [
        {"name": "Ada", "age": "36"},
        {"name": "Alan", "age": "41"},
    ]
    assert json.loads(_run("csv-to-json", "a;b\n1;2", delimiter=";")) == [{"a": "1", "b": "2"}]
    assert _run("json-to-csv", '[{"a": 1, "b": {"c": 2}}, {"a": 3}]') == 'a,b\n1,"{""c"": 2}"\n3,'
    assert _run("json-to-csv", '{"x": true}') == "x\ntrue"
    assert _run("json-to-csv", '[{"a": 1, "b": 2}]', delimiter="|") == "a|b\n1|2"


def test_base64_and_url():
    assert _run("base64-encode", "héllo") == "aMOpbGxv"
    assert _run("base64-decode", "aMOp\nbGxv") == "héllo"
    assert _run("url-encode", "a b&c/é!") == "a%20b%26c%2F%C3%A9!"
    assert _run("url-decode", "a%20b%26c%2F%C3%A9!") == "a b&c/é!"
    assert _run("base64-encode", "") == ""


@pytest.mark.parametrize(
    "converter_id,text,prefix",
    [
        ("json-to-yaml", "{bad", "Invalid JSON"),
        ("yaml-to-json", "a: [1, 2", "Invalid YAML"),
        ("yaml-to-json", "a: &x [1]\nb: *x", "Invalid YAML"),
        ("xml-to-json", "<a><b></a>", "Invalid XML"),
        ("csv-to-json", "a,b\n1,2,3", "Invalid CSV: line 2"),
        ("json-to-csv", "[1, 2]", "JSON to CSV expects"),
        ("base64-decode", "not base64!", "Invalid Base64"),
        ("url-decode", "%E0%A4%A", "Invalid URL-encoded"),
        ("url-decode", "%FF", "Invalid URL-encoded"),
    ],
)
def test_malformed_input_raises_readable_errors(converter_id, text, prefix):
    with pytest.raises(DataConversionError) as excinfo:
        _run(converter_id, text)
    assert str(excinfo.value).startswith(prefix)


def test_blank_structured_input_converts_to_blank_output():
    for converter_id in ("json-to-yaml", "yaml-to-json", "json-to-xml", "xml-to-json", "csv-to-json", "json-to-csv"):
        assert _run(converter_id, "  \n") == ""


@pytest.mark.parametrize(
    "text,expected",
    [
        ('{"a": 1}', ("JSON", 0.95)),
        ("  [1, 2]\n", ("JSON", 0.95)),
        ("<note><to>Ada</to></note>", ("XML", 0.9)),
        ("name: Ada\nage: 36", ("YAML", 0.6)),
        ("a;b\n1;2\n3;4", ("CSV", 0.5)),
        ("a,b\n1,2", ("CSV", 0.5)),
    ],
)
def test_detect_format(text, expected):
    guess = detect_format(text)
    assert (guess.format, guess.confidence) == expected


def test_detect_format_unknown_inputs():
    for text in ("", "   ", "hello", "[1, 2", "a,b"):
        assert detect_format(text) == UNKNOWN
    assert UNKNOWN.to_dict() == {"format": None, "confidence": None}


def test_settings_fall_back_to_defaults():
    settings = load_settings(None)
    assert settings.max_input_chars == 200_000
    assert settings.csv_delimiter == ","
    tuned = load_settings({"max_input_chars": "10", "csv_delimiter": ";"})
    assert tuned.max_input_chars == 10
    assert tuned.codec_options().delimiter == ";"
    assert tuned.codec_options("|").delimiter == "|"
    broken = load_settings({"max_input_chars": "lots", "csv_delimiter": "x"})
    assert broken.max_input_chars == 200_000
    assert broken.csv_delimiter == ","
