"""
XML export reader.

Reads a whole XML file with lxml and converts it into the ScalarNode /
SequenceNode tree, then flattens the row elements into raw records.
"""

from pathlib import Path

from lxml import etree

from posts_pipeline.core.errors import FileReadError, XmlParseError
from posts_pipeline.core.models import RawRecord
from posts_pipeline.observability.logger import get_logger

from .xml_tree import TEXT_KEY, ScalarNode, XmlNode, collapse, ensure_sequence


logger = get_logger(__name__)


class XmlReader:
    """
    Reads an XML document into a tree of scalar and sequence nodes.
    """

    def __init__(self, root_tag: str = "posts", row_tag: str = "row"):
        """
        Initialize XML reader.

        Args:
            root_tag: Expected name of the document element
            row_tag: Name of the repeated record elements
        """
        self.root_tag = root_tag
        self.row_tag = row_tag
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            huge_tree=True,
        )

    def read(self, file_path: str | Path) -> ScalarNode:
        """
        Read and parse a file.

        Args:
            file_path: Path to the XML file

        Returns:
            Document node mapping the root tag to the root element's node

        Raises:
            FileReadError: If the file is missing or unreadable
            XmlParseError: If the content is not well-formed XML
        """
        path = Path(file_path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise FileReadError(str(path), e.strerror or str(e)) from e

        try:
            root = etree.fromstring(content, self._parser)
        except etree.XMLSyntaxError as e:
            raise XmlParseError(str(path), str(e)) from e

        return ScalarNode({_local_name(root): element_to_node(root)})

    def read_records(self, file_path: str | Path) -> list[RawRecord]:
        """
        Read a file and return one raw record per row element.

        Raises:
            FileReadError: If the file is missing or unreadable
            XmlParseError: If the content is malformed or the root element is wrong
        """
        document = self.read(file_path)
        root = document.get(self.root_tag)
        if root is None:
            found = ", ".join(document.fields) or "nothing"
            raise XmlParseError(
                str(file_path), f"expected root element <{self.root_tag}>, found {found}"
            )

        records = []
        for root_node in ensure_sequence(root):
            for row in ensure_sequence(root_node.get(self.row_tag)):
                records.append(record_from_node(row))

        logger.debug(f"Extracted {len(records)} <{self.row_tag}> records from {file_path}")
        return records


def element_to_node(element: etree._Element) -> ScalarNode:
    """
    Convert an element to a ScalarNode.

    Attributes and child elements are merged into one mapping; an attribute
    and a child with the same name collapse into a sequence. Text is kept under
    ``_`` when the element also has attributes or children.

    The tree is walked with an explicit stack, so nesting depth is bounded
    only by what the parser accepts.
    """
    stack = [_open_frame(element)]
    while True:
        current, children, grouped = stack[-1]
        child = next(children, None)
        if child is not None:
            stack.append(_open_frame(child))
            continue

        stack.pop()
        node = _close_frame(current, grouped)
        if not stack:
            return node
        stack[-1][2].setdefault(_local_name(current), []).append(node)


def _open_frame(element: etree._Element):
    grouped: dict[str, list[ScalarNode]] = {}
    for name, value in element.attrib.items():
        grouped.setdefault(_local_name_of(name), []).append(ScalarNode(value))
    # Skip comments and processing instructions
    children = (child for child in element if isinstance(child.tag, str))
    return element, children, grouped


def _close_frame(element: etree._Element, grouped: dict[str, list[ScalarNode]]) -> ScalarNode:
    text = element.text or ""
    if not grouped:
        return ScalarNode(text)

    fields: dict[str, XmlNode] = {name: collapse(nodes) for name, nodes in grouped.items()}
    if text.strip():
        fields[TEXT_KEY] = ScalarNode(text)
    return ScalarNode(fields)


def record_from_node(node: ScalarNode) -> RawRecord:
    """
    Flatten a row node into a raw record of text values.

    Nested or repeated values are not scalar and are dropped.
    """
    record: RawRecord = {}
    for name, child in node.fields.items():
        if isinstance(child, ScalarNode) and child.is_text:
            record[name] = child.value
        else:
            logger.debug(f"Dropping non-scalar field {name!r} from row")
    return record


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _local_name_of(name: str) -> str:
    return etree.QName(name).localname
