# mdcomponents/markdown/extensions/component_render.py
"""
Render component nodes.

Runs once the rest of the tree is final (after inline processing,
prettifying and unescaping). Every outermost component node is rendered
to markup and replaced by an html stash placeholder, which Python-Markdown
restores during post-processing.

Slot content is rendered before the component that receives it: each
partition of a node's children is serialized on its own, which renders
any nested component first. The host therefore always gets final markup.

A component that is not registered, or whose invocation fails, is emitted
as a literal lower-cased tag. Failures additionally get an HTML comment:

    <alert type="info"><p>Hello</p></alert><!-- Error rendering component Alert: ... -->
"""

import logging
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from django.utils.html import escape
from markdown.treeprocessors import Treeprocessor

from ...components.binding import bind_attributes
from ...components.host import BoundInvocation, invoke_component
from ..nodes import ComponentNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentFailure:
    name: str
    message: str


def partition_slots(node, schema):
    """
    Split ``node``'s children into named slot content and default content.

    A direct child component whose name matches a named slot contributes
    its own children to that slot; the wrapper itself is dropped. Every
    other child is default content. Returns ``(named, default)`` where
    ``named`` maps slot parameter names to element lists.
    """
    named = {}
    default = []
    for child in node:
        slot = schema.named_slot(child.name) if isinstance(child, ComponentNode) else None
        if slot is None:
            default.append(child)
        else:
            named.setdefault(slot, []).extend(child)
    return named, default


def fallback_markup(node, content=None):
    """Literal tag for ``node``; ``content`` is the rendered markup of its children."""
    name = node.name.lower()
    attributes = "".join(f' {key}="{escape(value)}"' for key, value in node.attributes.items())
    if node.self_closing:
        return f"<{name}{attributes} />"
    return f"<{name}{attributes}>{content or ''}</{name}>"


def error_comment(name, message):
    # "--" would end the comment early.
    message = str(message).replace("--", "- -")
    return f"<!-- Error rendering component {name}: {message} -->"


def _copy_tree(element):
    """
    Copy ordinary elements so rendering a fragment does not touch the tree.

    Component nodes are shared, not copied: they are only ever read.
    """
    if isinstance(element, ComponentNode):
        return element
    clone = element.makeelement(element.tag, dict(element.attrib))
    clone.text = element.text
    clone.tail = element.tail
    clone.extend(_copy_tree(child) for child in element)
    return clone


class ComponentRenderProcessor(Treeprocessor):
    """Replace component nodes with rendered markup."""

    def __init__(self, md, registry, host, timeout=None, context=None):
        super().__init__(md)
        self.registry = registry
        self.host = host
        self.timeout = timeout
        self.context = context if context is not None else {}
        self._rendered = {}

    def run(self, root):
        self._rendered = {}
        self.md.component_failures = []
        self._resolve(root)

    def _outermost(self, parent):
        for child in parent:
            if isinstance(child, ComponentNode):
                yield parent, child
            else:
                yield from self._outermost(child)

    def _resolve(self, container):
        """Render and replace every outermost component node under ``container``."""
        for parent, node in list(self._outermost(container)):
            placeholder = self.md.htmlStash.store(self.render_node(node))
            self._replace(parent, node, placeholder)

    @staticmethod
    def _replace(parent, node, text):
        index = list(parent).index(node)
        text += node.tail or ""
        if index:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + text
        else:
            parent.text = (parent.text or "") + text
        parent.remove(node)

    def render_fragment(self, elements):
        """Render a list of sibling elements to final markup."""
        if not elements:
            return ""
        wrapper = ET.Element(self.md.doc_tag)
        wrapper.extend(_copy_tree(element) for element in elements)
        self._resolve(wrapper)

        output = self.md.serializer(wrapper)
        start_tag = f"<{self.md.doc_tag}>"
        end_tag = f"</{self.md.doc_tag}>"
        if output.startswith(start_tag) and output.endswith(end_tag):
            output = output[len(start_tag):-len(end_tag)]
        else:
            # An element with no content serializes as <div />.
            output = ""
        for postprocessor in self.md.postprocessors:
            output = postprocessor.run(output)
        return output.strip()

    def render_node(self, node):
        key = id(node)
        if key not in self._rendered:
            self._rendered[key] = self._render(node)
        return self._rendered[key]

    def _render(self, node):
        schema = self.registry.lookup(node.name)
        if schema is None:
            logger.debug(f"Component {node.name} is not registered; rendering literal tag")
            return self.render_fallback(node)

        try:
            parameters, _ = bind_attributes(schema, node.attributes)
            slots = {}
            default_content = None
            if not node.self_closing and len(node):
                named, default = partition_slots(node, schema)
                for slot, elements in named.items():
                    if elements:
                        slots[slot] = self.render_fragment(elements)
                if default and schema.has_default_slot:
                    default_content = self.render_fragment(default)

            invocation = BoundInvocation(
                component_name=schema.name,
                parameters=parameters,
                slots=slots,
                default_content=default_content,
                context=self.context,
            )
            return invoke_component(self.host, schema, invocation, timeout=self.timeout)
        except Exception as e:
            logger.error(f"Error rendering component {node.name}: {e}", exc_info=True)
            self.md.component_failures.append(ComponentFailure(node.name, str(e)))
            return self.render_fallback(node) + error_comment(node.name, e)

    def render_fallback(self, node):
        content = None
        if not node.self_closing:
            content = self.render_fragment(node.children)
        return fallback_markup(node, content)
