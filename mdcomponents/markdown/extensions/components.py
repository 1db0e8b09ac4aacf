# mdcomponents/markdown/extensions/components.py
"""
Markdown extension that renders component tags.

Extensions register their processors within markdown's pipeline:

1. Preprocessors: component tag lines are hidden from the raw HTML block
   preprocessor (priorities 21 and 19, around 'html_block' at 20)
2. Block processors: ``ComponentBlockProcessor`` turns tag lines into
   component nodes (priority 75, after indented code, before headers)
3. Inline processors: ``ComponentInlineProcessor`` picks up self-closing
   tags inside inline content (priority 95, before raw inline HTML)
4. Tree processors: ``ComponentRenderProcessor`` renders every node after
   Python-Markdown's own tree processors are done
5. Postprocessors: the stock raw html postprocessor restores the rendered
   markup

Usage:

    md = markdown.Markdown(extensions=[ComponentExtension(registry=registry)])
"""

from markdown.extensions import Extension

from ...components.host import get_default_host
from ...components.registry import get_default_registry
from ..nodes import BLOCK_TAG
from .component_render import ComponentRenderProcessor
from .component_tags import (
    INLINE_PATTERN,
    ComponentBlockProcessor,
    ComponentInlineProcessor,
    RestoreTagLinesPreprocessor,
    ShieldTagLinesPreprocessor,
)


class ComponentExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            "registry": ["", "ComponentRegistry to resolve tags against - Default: from settings"],
            "host": ["", "ComponentHost that renders components - Default: from settings"],
            "timeout": [0.0, "Seconds to wait for each component, 0 to wait indefinitely - Default: 0"],
            "context": [{}, "Mapping handed to every component invocation - Default: {}"],
        }
        # Non-None defaults: Extension.setConfig runs None-defaulted options
        # through parseBoolValue.
        super().__init__(**kwargs)
        self.md = None

    def extendMarkdown(self, md):
        self.md = md
        md.registerExtension(self)

        registry = self.getConfig("registry")
        if registry in ("", None):
            registry = get_default_registry()
        host = self.getConfig("host")
        if host in ("", None):
            host = get_default_host()

        if BLOCK_TAG not in md.block_level_elements:
            md.block_level_elements.append(BLOCK_TAG)

        # Either side of the raw HTML block preprocessor (20).
        md.preprocessors.register(ShieldTagLinesPreprocessor(md), "mdcomponents_shield", 21)
        md.preprocessors.register(RestoreTagLinesPreprocessor(md), "mdcomponents_restore", 19)
        md.parser.blockprocessors.register(
            ComponentBlockProcessor(md.parser), "mdcomponents_block", 75
        )
        md.inlinePatterns.register(
            ComponentInlineProcessor(INLINE_PATTERN, md), "mdcomponents_inline", 95
        )
        # Negative priority: runs after 'unescape' (0).
        md.treeprocessors.register(
            ComponentRenderProcessor(
                md,
                registry,
                host,
                timeout=self.getConfig("timeout") or None,
                context=self.getConfig("context"),
            ),
            "mdcomponents_render",
            -10,
        )
        self.reset()

    def reset(self):
        if self.md is not None:
            self.md.component_failures = []


def makeExtension(**kwargs):
    return ComponentExtension(**kwargs)
