# mdcomponents/markdown/extensions/component_tags.py
"""
Recognizers for component tags.

Block level, a line (indented less than the tab length) may hold one of:

    <Name attr="value" ... />      self-closing, never has children
    <Name attr="value" ...>        opens a container
    </Name>                        closes the innermost open container

Lines between an opening tag and its closing tag are parsed as ordinary
markdown children of the container. Closing is depth-aware per name, so
``<Card>`` may nest inside ``<Card>``. A container that is not closed
within the input available to the parser stays open, and the next block
handed to the same parent continues it (list items and blockquotes pass
their content one block at a time). A container still open at the end of
the document is closed there.

Component tag lines are hidden from the raw HTML block extractor, so a
component may share its lower-cased name with a block-level HTML element
(``<Section>``, ``<Header>``, ...).

Inline, only the self-closing form is recognized.
"""

import html
import logging
import re

from markdown import util
from markdown.blockprocessors import BlockProcessor
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor

from ..nodes import ComponentNode

logger = logging.getLogger(__name__)

SELF_CLOSING_RE = re.compile(r"^<([A-Z][A-Za-z0-9]*)\s*([^>]*)/>\s*$")
OPENING_RE = re.compile(r"^<([A-Z][A-Za-z0-9]*)\s*([^>]*)>$")
CLOSING_RE = re.compile(r"^</([A-Z][A-Za-z0-9]*)>\s*$")
ATTRIBUTE_RE = re.compile(r"""([\w-]+)=["']([^"']*)["']""")

INLINE_PATTERN = r"<([A-Z][A-Za-z0-9]*)\s*([^>]*)/>"

# Backslash escapes are already stashed when inline patterns run.
ESCAPED_CHAR_RE = re.compile(f"{util.STX}(\\d+){util.ETX}")

# Replaces the "<" of a tag line while raw HTML blocks are extracted.
# NormalizeWhitespace strips STX/ETX from the source, so it cannot clash.
SHIELD = f"{util.STX}mdcomponent{util.ETX}"


def parse_attributes(text):
    """Extract ``key="value"`` pairs; anything else in ``text`` is ignored."""
    attributes = {}
    for key, value in ATTRIBUTE_RE.findall(text or ""):
        attributes[key] = html.unescape(value)
    return attributes


def strip_tag_indent(line, tab_length):
    """Return the line without its indentation, or None if it is indented as code."""
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) >= tab_length:
        return None
    return stripped


def is_tag_line(line, tab_length):
    stripped = strip_tag_indent(line, tab_length)
    if stripped is None:
        return False
    return any(regex.match(stripped) for regex in (SELF_CLOSING_RE, OPENING_RE, CLOSING_RE))


def unshield(text):
    if not text:
        return text
    return text.replace(SHIELD, "<")


class ShieldTagLinesPreprocessor(Preprocessor):
    """
    Hide component tag lines from the raw HTML block preprocessor.

    Runs just ahead of ``html_block`` (after fenced code is stashed);
    ``RestoreTagLinesPreprocessor`` undoes it right after.
    """

    def run(self, lines):
        shielded = []
        for line in lines:
            if is_tag_line(line, self.md.tab_length):
                indent = len(line) - len(line.lstrip(" "))
                line = line[:indent] + SHIELD + line[indent + 1:]
            shielded.append(line)
        return shielded


class RestoreTagLinesPreprocessor(Preprocessor):
    """Put back tag lines hidden by ``ShieldTagLinesPreprocessor``."""

    def run(self, lines):
        # Tag lines inside raw HTML blocks were stashed with the rest of the block.
        blocks = self.md.htmlStash.rawHtmlBlocks
        for index, block in enumerate(blocks):
            if isinstance(block, str):
                blocks[index] = unshield(block)
            else:
                for element in block.iter():
                    element.text = unshield(element.text)
                    element.tail = unshield(element.tail)
        return [unshield(line) for line in lines]


class ComponentBlockProcessor(BlockProcessor):
    """Turn component tag lines into ComponentNode elements."""

    def _tag_line(self, line):
        return strip_tag_indent(line, self.tab_length)

    def match_open(self, line):
        """Return ``(name, attribute_text, self_closing)`` for a tag-opening line."""
        stripped = self._tag_line(line)
        if stripped is None:
            return None
        m = SELF_CLOSING_RE.match(stripped)
        if m:
            return m.group(1), m.group(2), True
        m = OPENING_RE.match(stripped)
        if m:
            return m.group(1), m.group(2), False
        return None

    def match_close(self, line):
        stripped = self._tag_line(line)
        if stripped is None:
            return None
        m = CLOSING_RE.match(stripped)
        return m.group(1) if m else None

    def open_container(self, parent):
        """Return the last child of ``parent`` if it is a container still waiting for its close."""
        last = self.lastChild(parent)
        if isinstance(last, ComponentNode) and not last.closed:
            return last
        return None

    @staticmethod
    def open_depth(node):
        """Count open same-name containers nested inside ``node`` along its last children."""
        depth = 0
        child = node[-1] if len(node) else None
        while isinstance(child, ComponentNode) and not child.closed:
            if child.name == node.name:
                depth += 1
            child = child[-1] if len(child) else None
        return depth

    def test(self, parent, block):
        if self.open_container(parent) is not None:
            return True
        return any(self.match_open(line) for line in block.split("\n"))

    def run(self, parent, blocks):
        node = self.open_container(parent)
        if node is not None:
            lines = blocks.pop(0).split("\n")
            logger.debug(f"Continuing open component <{node.name}>")
            self.fill(node, lines, blocks, depth=self.open_depth(node))
            return

        lines = blocks[0].split("\n")

        for index, line in enumerate(lines):
            match = self.match_open(line)
            if match:
                break
        else:  # pragma: no cover
            return False

        blocks.pop(0)
        before = lines[:index]
        after = lines[index + 1:]
        if before:
            # Lines ahead of the tag are ordinary markdown.
            self.parser.parseBlocks(parent, ["\n".join(before)])

        name, attribute_text, self_closing = match
        node = ComponentNode(name, parse_attributes(attribute_text), self_closing=self_closing)
        parent.append(node)

        if self_closing:
            if after:
                blocks.insert(0, "\n".join(after))
            return

        self.fill(node, after, blocks)

    def fill(self, node, lines, blocks, depth=0):
        """Parse body lines into ``node`` up to its closing tag."""
        body, after, closed = self.collect_body(node.name, lines, blocks, depth)
        node.closed = closed
        if after:
            blocks.insert(0, "\n".join(after))

        while body and not body[-1].strip():
            body.pop()
        if any(line.strip() for line in body):
            self.parser.state.set("component")
            try:
                self.parser.parseChunk(node, "\n".join(body))
            finally:
                self.parser.state.reset()

    def collect_body(self, name, lines, blocks, depth=0):
        """
        Gather body lines up to the matching ``</name>``.

        Consumes further blocks from ``blocks`` as needed, restoring the
        blank line that separated them. Returns ``(body, after, closed)``
        where ``after`` holds the lines that followed the closing tag.
        """
        body = []
        separate = False
        while True:
            for index, line in enumerate(lines):
                opened = self.match_open(line)
                if opened and opened[0] == name and not opened[2]:
                    depth += 1
                elif self.match_close(line) == name:
                    if depth == 0:
                        return body, lines[index + 1:], True
                    depth -= 1
                if separate:
                    body.append("")
                    separate = False
                body.append(line)

            if not blocks:
                logger.debug(f"Component <{name}> is still open at the end of its block")
                return body, [], False
            separate = bool(body)
            lines = blocks.pop(0).split("\n")


class ComponentInlineProcessor(InlineProcessor):
    """Self-closing component tags inside inline content."""

    def handleMatch(self, m, data):
        attribute_text = ESCAPED_CHAR_RE.sub(lambda e: chr(int(e.group(1))), m.group(2))
        node = ComponentNode(
            m.group(1), parse_attributes(attribute_text), self_closing=True, inline=True
        )
        return node, m.start(0), m.end(0)
