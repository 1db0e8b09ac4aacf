"""mdcomponents exception hierarchy.

Keep this module small and dependency-free: it is imported by the component
layer, the markdown extension and by tests. Configuration problems use
Django's ``ImproperlyConfigured`` instead of a class from here.
"""


class MdComponentsError(Exception):
    """Base exception for all mdcomponents errors."""


class ComponentParameterError(MdComponentsError):
    """Raised when bound parameters violate a component's schema at invocation."""


class ComponentTimeoutError(MdComponentsError):
    """Raised when the component host does not return within the configured timeout."""
