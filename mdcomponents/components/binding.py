"""Bind raw tag attributes to a component's declared parameters."""

import logging
import re

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def _parse_int(raw: str) -> int:
    if not _INT_RE.match(raw):
        raise ValueError(raw)
    return int(raw)


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(raw)


def _parse_float(raw: str) -> float:
    if "_" in raw:
        raise ValueError(raw)
    return float(raw)


_CONVERTERS = {
    int: _parse_int,
    bool: _parse_bool,
    float: _parse_float,
}


def coerce_value(raw: str, target: type):
    """
    Convert attribute text to ``target``.

    Conversion failure is not an error: the raw string is returned and the
    host decides whether to reject it.
    """
    converter = _CONVERTERS.get(target)
    if converter is None:
        return raw
    try:
        return converter(raw)
    except ValueError:
        return raw


def bind_attributes(schema, attributes):
    """
    Match attributes to parameters case-insensitively and coerce their values.

    Returns ``(parameters, unmatched)`` where ``parameters`` is keyed by the
    declared parameter name and ``unmatched`` lists attribute keys that have
    no writable parameter.
    """
    parameters = {}
    unmatched = []

    for key, raw in attributes.items():
        param = schema.parameter(key)
        if param is None or not param.writable:
            unmatched.append(key)
            continue
        parameters[param.name] = coerce_value(raw, param.type)

    if unmatched:
        logger.debug(f"Ignoring attributes {unmatched} on component {schema.name}")

    return parameters, unmatched
