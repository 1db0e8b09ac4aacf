# mdcomponents/markdown/renderer.py

import markdown

from ..components.host import get_default_host
from ..components.registry import get_default_registry
from .config import get_markdown_config
from .extensions.components import ComponentExtension
from .postprocessors import apply_postprocessors


def render_markdown(text, context=None, *, registry=None, host=None):
    """
    Main rendering function with the component extension and post processing pipeline

    Args:
        text: Raw markdown text
        context: Optional dict handed to components and postprocessors;
            ``component_errors`` is set to the failures of this render
        registry: ComponentRegistry to use instead of the one from settings
        host: ComponentHost to use instead of the one from settings
    """
    context = context if context is not None else {}
    config = get_markdown_config()
    if registry is None:
        registry = get_default_registry()
    if host is None:
        host = get_default_host()

    components = ComponentExtension(
        registry=registry,
        host=host,
        timeout=config["TIMEOUT"],
        context=context,
    )

    # A fresh instance per call: nothing is shared between concurrent renders.
    md = markdown.Markdown(
        extensions=[*config["EXTENSIONS"], components],
        extension_configs=config["EXTENSION_CONFIGS"],
        output_format="html",
    )
    html = md.convert(text)
    context["component_errors"] = list(md.component_failures)

    # Post-processing: After markdown conversion
    html = apply_postprocessors(html, context)

    return html
