"""
Batch data source readers.
"""

from .xml_reader import XmlReader, element_to_node, record_from_node
from .xml_tree import ScalarNode, SequenceNode, XmlNode, ensure_sequence

__all__ = [
    "XmlReader",
    "ScalarNode",
    "SequenceNode",
    "XmlNode",
    "element_to_node",
    "ensure_sequence",
    "record_from_node",
]
