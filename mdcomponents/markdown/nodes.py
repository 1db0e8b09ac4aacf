# mdcomponents/markdown/nodes.py

from xml.etree import ElementTree as ET

# Element tags used for component nodes in the markdown tree. They never
# reach the serializer: the render treeprocessor replaces every node.
BLOCK_TAG = "mdc-block"
INLINE_TAG = "mdc-inline"


class ComponentNode(ET.Element):
    """
    A component reference in the markdown tree.

    ``attributes`` holds the entity-decoded attribute text in source order.
    Children are ordinary sub-elements, so block content of a container
    node goes through the normal markdown tree processors before the node
    is rendered. ``closed`` is False while a container still waits for its
    closing tag.
    """

    def __init__(self, name, attributes=None, self_closing=False, inline=False):
        super().__init__(INLINE_TAG if inline else BLOCK_TAG)
        self.name = name
        self.attributes = dict(attributes or {})
        self.self_closing = self_closing
        self.closed = True

    @property
    def inline(self):
        return self.tag == INLINE_TAG

    @property
    def children(self):
        return list(self)

    def __repr__(self):
        kind = "self-closing" if self.self_closing else f"{len(self)} children"
        return f"<ComponentNode {self.name} ({kind})>"
