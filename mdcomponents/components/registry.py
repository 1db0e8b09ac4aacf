"""Component registry: tag name to statically built parameter schema."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Mapping, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string
from django.utils.safestring import mark_safe

from ..exceptions import ComponentParameterError
from .base import SUPPORTED_TYPES, Component, Param

logger = logging.getLogger(__name__)


def _matches_type(value, expected: type) -> bool:
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, expected)


@dataclass(frozen=True)
class ComponentSchema:
    """
    Parameter schema of one registered component.

    Built once at registration; read-only afterwards. Parameter and slot
    lookups are keyed by lower-cased name so attribute and wrapper tag
    matching is case-insensitive.
    """

    name: str
    component: type
    parameters: Mapping[str, Param]
    default_slot: Optional[str]
    named_slots: Mapping[str, str]

    @classmethod
    def for_component(cls, component: type, name: Optional[str] = None) -> "ComponentSchema":
        if not (isinstance(component, type) and issubclass(component, Component)):
            raise ImproperlyConfigured(f"{component!r} is not a Component subclass")

        name = name or component.__name__
        parameters: dict[str, Param] = {}
        default_slot = None
        named_slots: dict[str, str] = {}

        for param in component.parameters:
            key = param.name.lower()
            if key in parameters:
                raise ImproperlyConfigured(
                    f"{component.__name__} declares parameter '{param.name}' more than once"
                )
            if param.is_slot:
                if param.default_slot:
                    if default_slot is not None:
                        raise ImproperlyConfigured(
                            f"{component.__name__} declares more than one default slot"
                        )
                    default_slot = param.name
                else:
                    named_slots[key] = param.name
            elif param.type not in SUPPORTED_TYPES:
                raise ImproperlyConfigured(
                    f"{component.__name__}.{param.name}: unsupported parameter type "
                    f"{param.type!r} (expected one of str, int, bool, float)"
                )
            parameters[key] = param

        return cls(
            name=name,
            component=component,
            parameters=parameters,
            default_slot=default_slot,
            named_slots=named_slots,
        )

    @property
    def has_default_slot(self) -> bool:
        return self.default_slot is not None

    def parameter(self, attribute_name: str) -> Optional[Param]:
        return self.parameters.get(attribute_name.lower())

    def named_slot(self, tag_name: str) -> Optional[str]:
        return self.named_slots.get(tag_name.lower())

    def build_arguments(self, invocation) -> dict:
        """
        Validate a bound invocation and return the component's arguments.

        Every declared parameter appears in the result: supplied values are
        type-checked, missing optional ones take their default and missing
        slots are None. Raises ComponentParameterError on any violation.
        """
        arguments = {}
        for param in self.parameters.values():
            if param.is_slot:
                if param.default_slot:
                    markup = invocation.default_content
                else:
                    markup = invocation.slots.get(param.name)
                arguments[param.name] = mark_safe(markup) if markup is not None else None
                continue

            if param.name in invocation.parameters:
                value = invocation.parameters[param.name]
                if not _matches_type(value, param.type):
                    raise ComponentParameterError(
                        f"Parameter '{param.name}' of {self.name} expects "
                        f"{param.type.__name__}, got {value!r}"
                    )
            elif param.required:
                raise ComponentParameterError(
                    f"Missing required parameter '{param.name}' for {self.name}"
                )
            else:
                value = param.default
            arguments[param.name] = value
        return arguments


class ComponentRegistry:
    """
    Thread-safe, additive-only mapping of tag names to component schemas.

    The first registration for a name wins; later ones are ignored so that
    several setup call sites cannot override each other. Lookups are
    case-sensitive and never take the lock.
    """

    def __init__(self):
        self._schemas: dict[str, ComponentSchema] = {}
        self._lock = threading.Lock()

    def register(self, component: type, name: Optional[str] = None) -> bool:
        schema = ComponentSchema.for_component(component, name)
        with self._lock:
            if schema.name in self._schemas:
                logger.warning(
                    f"Component '{schema.name}' already registered; "
                    f"ignoring {component.__module__}.{component.__qualname__}"
                )
                return False
            # Copy-on-write keeps concurrent readers on a complete dict.
            schemas = dict(self._schemas)
            schemas[schema.name] = schema
            self._schemas = schemas
        return True

    def lookup(self, name: str) -> Optional[ComponentSchema]:
        return self._schemas.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._schemas

    def names(self) -> list[str]:
        return sorted(self._schemas)

    def __contains__(self, name) -> bool:
        return self.is_registered(name)

    def __len__(self) -> int:
        return len(self._schemas)


def build_registry(entries: Iterable) -> ComponentRegistry:
    """
    Build a registry from setting entries.

    Each entry is a dotted path to a Component subclass, a
    ``(name, dotted_path)`` pair, or a ``{"name": ..., "component": ...}``
    mapping where ``component`` is a dotted path or the class itself.
    """
    registry = ComponentRegistry()
    for entry in entries:
        name = None
        if isinstance(entry, Mapping):
            if "component" not in entry:
                raise ImproperlyConfigured(f"Component entry {entry!r} has no 'component' key")
            name = entry.get("name")
            component = entry["component"]
        elif isinstance(entry, (tuple, list)):
            if len(entry) != 2:
                raise ImproperlyConfigured(
                    f"Component entry {entry!r} must be a (name, dotted_path) pair"
                )
            name, component = entry
        else:
            component = entry

        if isinstance(component, str):
            try:
                component = import_string(component)
            except ImportError as e:
                raise ImproperlyConfigured(f"Cannot import component '{component}': {e}") from e
        registry.register(component, name)
    return registry


@lru_cache(maxsize=1)
def get_default_registry() -> ComponentRegistry:
    """Registry built from ``settings.MDCOMPONENTS["COMPONENTS"]``."""
    conf = getattr(settings, "MDCOMPONENTS", {})
    return build_registry(conf.get("COMPONENTS", []))
