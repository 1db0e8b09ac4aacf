import pytest

from mdcomponents.components import bind_attributes, coerce_value
from mdcomponents.components.registry import ComponentSchema
from tests.components import Card, Stats


@pytest.mark.parametrize(
    "raw, target, expected",
    [
        ("hello", str, "hello"),
        ("42", int, 42),
        (" -7 ", int, -7),
        ("4.5", int, "4.5"),
        ("many", int, "many"),
        ("true", bool, True),
        ("FALSE", bool, False),
        (" True ", bool, True),
        ("yes", bool, "yes"),
        ("0.25", float, 0.25),
        ("1e3", float, 1000.0),
        ("1_000", float, "1_000"),
        ("n/a", float, "n/a"),
    ],
)
def test_coerce_value(raw, target, expected):
    value = coerce_value(raw, target)
    assert value == expected
    assert type(value) is type(expected)


def test_attributes_match_case_insensitively():
    schema = ComponentSchema.for_component(Stats)
    parameters, unmatched = bind_attributes(schema, {"COUNT": "3", "Enabled": "true"})
    assert parameters == {"count": 3, "enabled": True}
    assert unmatched == []


def test_unknown_attributes_are_unmatched():
    schema = ComponentSchema.for_component(Stats)
    parameters, unmatched = bind_attributes(schema, {"count": "1", "color": "red"})
    assert parameters == {"count": 1}
    assert unmatched == ["color"]


def test_read_only_parameters_are_not_bound():
    schema = ComponentSchema.for_component(Stats)
    parameters, unmatched = bind_attributes(schema, {"locked": "no"})
    assert parameters == {}
    assert unmatched == ["locked"]


def test_slots_are_not_bound_from_attributes():
    schema = ComponentSchema.for_component(Card)
    parameters, unmatched = bind_attributes(schema, {"heading": "<b>x</b>", "title": "T"})
    assert parameters == {"title": "T"}
    assert unmatched == ["heading"]


def test_coercion_failure_keeps_raw_string():
    schema = ComponentSchema.for_component(Stats)
    parameters, _ = bind_attributes(schema, {"ratio": "half"})
    assert parameters == {"ratio": "half"}
