"""
Parsed XML tree shape.

An element becomes a ScalarNode: its text when it has no attributes or child
elements, otherwise a mapping where attributes and child elements share one
namespace. Repeated siblings with the same name become a SequenceNode.
``ensure_sequence`` is the single place where a lone node is promoted to a
one-element sequence.
"""

from dataclasses import dataclass, field
from typing import Union

# Key holding an element's own text when it also has attributes or children.
TEXT_KEY = "_"


@dataclass(frozen=True)
class ScalarNode:
    """A single element: plain text, or merged attributes and children."""

    value: Union[str, dict[str, "XmlNode"]] = ""

    @property
    def is_text(self) -> bool:
        return isinstance(self.value, str)

    @property
    def fields(self) -> dict[str, "XmlNode"]:
        """Child nodes by name; empty for text nodes."""
        return {} if isinstance(self.value, str) else self.value

    def get(self, name: str) -> "XmlNode | None":
        return self.fields.get(name)


@dataclass(frozen=True)
class SequenceNode:
    """Repeated sibling elements sharing one name, in document order."""

    items: tuple[ScalarNode, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.items)


XmlNode = Union[ScalarNode, SequenceNode]


def ensure_sequence(node: XmlNode | None) -> tuple[ScalarNode, ...]:
    """
    Return the node as a sequence of scalar nodes.

    Args:
        node: A scalar node, a sequence node, or None for an absent element

    Returns:
        ``()`` for None, ``(node,)`` for a scalar node, the items otherwise
    """
    if node is None:
        return ()
    if isinstance(node, SequenceNode):
        return node.items
    return (node,)


def collapse(nodes: list[ScalarNode]) -> XmlNode:
    """Collapse same-named siblings: one stays scalar, several become a sequence."""
    if len(nodes) == 1:
        return nodes[0]
    return SequenceNode(tuple(nodes))
