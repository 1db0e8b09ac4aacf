from .base import Component, Param, Slot
from .binding import bind_attributes, coerce_value
from .host import (
    BoundInvocation,
    ComponentHost,
    TemplateComponentHost,
    get_default_host,
    invoke_component,
)
from .registry import ComponentRegistry, ComponentSchema, build_registry, get_default_registry

__all__ = [
    "Component",
    "Param",
    "Slot",
    "bind_attributes",
    "coerce_value",
    "BoundInvocation",
    "ComponentHost",
    "TemplateComponentHost",
    "get_default_host",
    "invoke_component",
    "ComponentRegistry",
    "ComponentSchema",
    "build_registry",
    "get_default_registry",
]
