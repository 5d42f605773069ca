"""
CAML predicate tree and serializer.

Queries are built as node objects and only turned into XML here, through
ElementTree, so every literal and attribute value is escaped on the way
out. Nothing else in the package should concatenate CAML strings.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from kbpages.core.exceptions import QueryCompilationError

# Characters XML 1.0 cannot carry at all, escaped or not
_XML_ILLEGAL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


@dataclass(frozen=True)
class FieldRef:
    """Reference to a list column by internal name."""

    name: str
    lookup_id: bool = False


@dataclass(frozen=True)
class Value:
    """Typed literal: Text, Integer, DateTime, User or URL."""

    type: str
    text: str
    include_time: bool = False


@dataclass(frozen=True)
class Comparison:
    """Binary comparison between a column and a literal."""

    field: FieldRef
    value: Value

    tag: ClassVar[str] = ""


class Eq(Comparison):
    tag = "Eq"


class Geq(Comparison):
    tag = "Geq"


class Lt(Comparison):
    tag = "Lt"


class Contains(Comparison):
    tag = "Contains"


@dataclass(frozen=True, init=False)
class Logical:
    """And/Or over any number of children."""

    children: Tuple["Node", ...]

    tag: ClassVar[str] = ""

    def __init__(self, *children: "Node"):
        if not children:
            raise ValueError(f"<{self.tag}> needs at least one operand")
        object.__setattr__(self, "children", tuple(children))


class And(Logical):
    tag = "And"


class Or(Logical):
    tag = "Or"


Node = Union[Comparison, Logical]


@dataclass(frozen=True)
class OrderBy:
    field: FieldRef
    ascending: bool = True


@dataclass(frozen=True)
class View:
    """A complete view: predicate, ordering and row limit."""

    where: Node
    order_by: Optional[OrderBy]
    row_limit: int
    scope: str = "RecursiveAll"


# ===== SERIALIZATION =====


def _bool_attr(flag: bool) -> str:
    return "TRUE" if flag else "FALSE"


def _field_ref_element(field: FieldRef, **extra: str) -> ET.Element:
    attrs = {"Name": field.name}
    if field.lookup_id:
        attrs["LookupId"] = "TRUE"
    attrs.update(extra)
    return ET.Element("FieldRef", attrs)


def _check_xml_text(column: str, text: str) -> None:
    if _XML_ILLEGAL_CHARS.search(text):
        raise QueryCompilationError(column, text, "contains control characters that XML cannot represent")


def node_to_element(node: Node) -> ET.Element:
    """Convert a predicate node into an XML element."""
    if isinstance(node, Comparison):
        _check_xml_text(node.field.name, node.field.name)
        _check_xml_text(node.field.name, node.value.text)
        element = ET.Element(node.tag)
        element.append(_field_ref_element(node.field))
        value_attrs = {"Type": node.value.type}
        if node.value.include_time:
            value_attrs["IncludeTimeValue"] = "TRUE"
        value = ET.SubElement(element, "Value", value_attrs)
        value.text = node.value.text
        return element

    if isinstance(node, Logical):
        if len(node.children) == 1:
            return node_to_element(node.children[0])
        # CAML logical operators take exactly two operands
        element = ET.Element(node.tag)
        element.append(node_to_element(node.children[0]))
        element.append(node_to_element(type(node)(*node.children[1:])))
        return element

    raise TypeError(f"Not a CAML predicate node: {node!r}")


def view_to_element(view: View) -> ET.Element:
    root = ET.Element("View", {"Scope": view.scope})
    query = ET.SubElement(root, "Query")
    where = ET.SubElement(query, "Where")
    where.append(node_to_element(view.where))

    if view.order_by is not None:
        _check_xml_text(view.order_by.field.name, view.order_by.field.name)
        order_by = ET.SubElement(query, "OrderBy")
        order_by.append(
            _field_ref_element(view.order_by.field, Ascending=_bool_attr(view.order_by.ascending))
        )

    row_limit = ET.SubElement(root, "RowLimit")
    row_limit.text = str(view.row_limit)
    return root


def serialize(item: Union[Node, View]) -> str:
    """Serialize a node or a full view to a CAML string."""
    element = view_to_element(item) if isinstance(item, View) else node_to_element(item)
    return ET.tostring(element, encoding="unicode")
