"""
Schema-free XML serialization for geometry value types.

Three-component values are written as X, Y, Z attributes
(``<Point3D X="1.0" Y="2.0" Z="3.0" />``) or as child elements
(``<Point3D><X>1.0</X>...</Point3D>``). Reading accepts either encoding.

Composite values (Plane, Ray3D, CoordinateSystem) declare their parts in an
``_XML_PARTS`` class attribute of ``(element name, attribute name, type)``
tuples, in constructor order. Each part is written as a child element.

Components are written with repr(float), so a round trip is bit-identical.
"""

from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from typing import Optional, Union

from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)

STYLES = ("attribute", "element")
_COMPONENTS = ("X", "Y", "Z")


def _check_style(style: str) -> None:
    if style not in STYLES:
        raise InvalidArgumentError(f"Unknown XML style {style!r}, expected one of {STYLES}")


def write_xml(value, tag: Optional[str] = None, style: str = "attribute") -> ET.Element:
    """
    Build an XML element for a geometry value.

    Args:
        value: Point3D, Vector3D, UnitVector3D or a composite value
        tag: Element name (defaults to the class name)
        style: 'attribute' or 'element' encoding for X, Y, Z

    Returns:
        ElementTree element
    """
    _check_style(style)
    elem = ET.Element(tag or type(value).__name__)

    parts = getattr(value, "_XML_PARTS", None)
    if parts is not None:
        for name, attr, _ in parts:
            elem.append(write_xml(getattr(value, attr), name, style))
        return elem

    for name, component in zip(_COMPONENTS, (value.x, value.y, value.z)):
        text = repr(float(component))
        if style == "attribute":
            elem.set(name, text)
        else:
            ET.SubElement(elem, name).text = text
    return elem


def to_xml_string(value, tag: Optional[str] = None, style: str = "attribute") -> str:
    """Serialize a geometry value to an XML string."""
    return ET.tostring(write_xml(value, tag, style), encoding="unicode")


def _read_component(elem: ET.Element, name: str) -> float:
    text = elem.get(name)
    if text is None:
        child = elem.find(name)
        if child is not None:
            text = child.text
    if text is None:
        raise InvalidArgumentError(f"Missing required field {name!r} in <{elem.tag}>")
    try:
        return float(text.strip())
    except ValueError as e:
        raise InvalidArgumentError(f"Field {name!r} in <{elem.tag}> is not numeric: {text!r}") from e


def _as_element(source: Union[str, bytes, ET.Element]) -> ET.Element:
    if isinstance(source, ET.Element):
        return source
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise InvalidArgumentError(f"Invalid XML: {e}") from e


def read_xml(cls, source: Union[str, bytes, ET.Element]):
    """
    Read a geometry value of type `cls` from XML.

    The three floats (or the composite parts) are read first and then passed
    to the regular constructor, so all construction invariants still apply.

    Args:
        cls: Target type
        source: XML string/bytes or an already parsed element

    Returns:
        Instance of cls
    """
    elem = _as_element(source)

    parts = getattr(cls, "_XML_PARTS", None)
    if parts is not None:
        values = []
        for name, _, part_cls in parts:
            child = elem.find(name)
            if child is None:
                raise InvalidArgumentError(f"Missing required element {name!r} in <{elem.tag}>")
            values.append(read_xml(part_cls, child))
        return cls(*values)

    x, y, z = (_read_component(elem, name) for name in _COMPONENTS)
    logger.debug("Read <%s> as %s(%r, %r, %r)", elem.tag, cls.__name__, x, y, z)
    return cls(x, y, z)
