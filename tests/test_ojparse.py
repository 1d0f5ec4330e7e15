import pytest

from drtscenario.ojmodel import OJsonBool, OJsonList, OJsonMap, OJsonString, json_string
from drtscenario.ojparse import OJsonParseError, parse_ordered_json


def test_parse_map_preserves_order():
    result = parse_ordered_json(b'{"b": "1", "a": "2", "c": true}')
    assert isinstance(result, OJsonMap)
    assert [kv.key for kv in result] == ["b", "a", "c"]
    assert result.ordered_kv[2].value == OJsonBool(True)


def test_parse_list():
    result = parse_ordered_json('["x", false, []]')
    assert result == OJsonList([OJsonString("x"), OJsonBool(False), OJsonList()])


def test_parse_string_top_level():
    assert parse_ordered_json('  "hello"  ') == OJsonString("hello")


def test_parse_empty_map_and_list():
    assert parse_ordered_json("{}") == OJsonMap()
    assert parse_ordered_json(" [ ] ") == OJsonList()


def test_escaped_quote_kept_verbatim():
    result = parse_ordered_json(r'["a\"b"]')
    assert result == OJsonList([OJsonString(r"a\"b")])


def test_duplicate_key_keeps_first():
    result = parse_ordered_json('{"k": "1", "k": "2"}')
    assert len(result) == 1
    assert result.ordered_kv[0].value == OJsonString("1")


def test_nested_structure():
    text = '{"outer": {"inner": ["a", {"deep": true}]}}'
    result = parse_ordered_json(text)
    inner = result.ordered_kv[0].value.ordered_kv[0].value
    assert inner[0] == OJsonString("a")
    assert inner[1].ordered_kv[0].key == "deep"


def test_round_trip_formatting_is_stable():
    text = '{"a": ["x", "y"], "b": {}, "c": false}'
    once = json_string(parse_ordered_json(text))
    assert json_string(parse_ordered_json(once)) == once


def test_numbers_are_rejected():
    with pytest.raises(OJsonParseError, match="Invalid value"):
        parse_ordered_json('["1", 5]')


def test_trailing_characters_rejected():
    with pytest.raises(OJsonParseError, match="unexpected characters at the end"):
        parse_ordered_json('{} x')


def test_key_must_be_quoted():
    with pytest.raises(OJsonParseError, match="map key must start with a quote"):
        parse_ordered_json("{a: true}")


def test_colon_expected():
    with pytest.raises(OJsonParseError, match="colon expected"):
        parse_ordered_json('{"a" true}')


def test_misplaced_character():
    with pytest.raises(OJsonParseError, match="misplaced character"):
        parse_ordered_json("}")


def test_empty_input_rejected():
    with pytest.raises(OJsonParseError, match="state stack should be empty"):
        parse_ordered_json("")


def test_unterminated_map_rejected():
    with pytest.raises(OJsonParseError):
        parse_ordered_json('{"a": "b"')


def test_invalid_utf8_rejected():
    with pytest.raises(OJsonParseError):
        parse_ordered_json(b'"\xff"')