# mdcomponents/components/base.py
"""
Declarations for components that can be invoked from markdown.

A component is a Django-rendered unit with a statically declared parameter
list. Markdown refers to it by tag name:

    <Alert type="warning">
    Something **important**.
    </Alert>

Declaring the component:

    class Alert(Component):
        template_name = "components/alert.html"
        parameters = [
            Param("type", default="info"),
            Param("dismissible", bool, default=False),
            Slot("child_content", default_slot=True),
        ]

Scalar parameters receive attribute text converted to their declared type.
Slots receive rendered markup: the default slot gets every child block that
is not claimed by a named slot, a named slot gets the children of a wrapper
tag carrying the slot's name (matched case-insensitively):

    <Card>
    <Title>
    ### Title
    </Title>
    Body text.
    </Card>
"""

from dataclasses import dataclass
from typing import Any, Optional

from django.core.exceptions import ImproperlyConfigured
from django.template.loader import render_to_string

SUPPORTED_TYPES = (str, int, bool, float)


@dataclass(frozen=True)
class Param:
    """A scalar component parameter bound from a tag attribute."""

    name: str
    type: type = str
    required: bool = False
    default: Any = None
    writable: bool = True

    is_slot = False


@dataclass(frozen=True)
class Slot(Param):
    """A component parameter that receives rendered child markup."""

    writable: bool = False
    default_slot: bool = False

    is_slot = True


class Component:
    """
    Base class for markdown components.

    A new instance is created for every invocation, so instances may keep
    per-render state. Override ``render`` to produce markup without a
    template.
    """

    template_name: Optional[str] = None
    parameters = ()

    def get_context_data(self, **kwargs):
        return kwargs

    def get_template_names(self):
        if self.template_name is None:
            raise ImproperlyConfigured(
                f"{type(self).__name__} requires either a definition of "
                "'template_name' or an implementation of 'render()'"
            )
        return [self.template_name]

    def render(self, context, request=None) -> str:
        return render_to_string(self.get_template_names(), context, request=request)
