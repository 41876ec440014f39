"""element.py - Generic Attributed Element Trees

Thin element tree consumed by the entity builders. Elements are created from
SDF markup with :code:`lxml` or constructed directly.
"""
from __future__ import annotations

import os
import typing as typ

import numpy as np

from lxml import etree

from sdf_dom.errors import Error, ErrorCode, Errors
from sdf_dom.geometry import Pose
from sdf_dom.utilities import parse_vector

__all__ = ['Element', 'read_file', 'read_string']

def _parse_bool(value: str) -> bool:
    value = value.strip().lower()
    if value in ('true', '1'):
        return True
    if value in ('false', '0'):
        return False
    raise ValueError(f"'{value}' is not a boolean")

# Text to value converters keyed by requested type
_CONVERTERS: dict[type, typ.Callable[[str], typ.Any]] = {
    str: lambda value: value.strip(),
    int: lambda value: int(value.strip()),
    float: lambda value: float(value.strip()),
    bool: _parse_bool,
    Pose: Pose.from_string,
    np.ndarray: lambda value: parse_vector(value, 3),
}

class Element():
    """Named element with ordered attributes, text value, and child elements

    :param name: Element kind, e.g. :code:`'model'`
    :type name: str

    :param attributes: Ordered attribute mapping, defaults to empty
    :type attributes: dict[str, str], optional

    :param children: Child elements, defaults to empty
    :type children: list[Element], optional

    :param value: Element text, defaults to ''
    :type value: str, optional

    :param line: Source line number, defaults to None
    :type line: int | None, optional
    """
    def __init__(self,
                 name: str = '',
                 attributes: dict[str, str] | None = None,
                 children: list[Element] | None = None,
                 value: str = '',
                 line: int | None = None):
        """Initialize Element"""
        self.name = name
        self.attributes = dict(attributes) if attributes else {}
        self.children = list(children) if children else []
        self.value = value
        self.line = line

    @classmethod
    def from_xml(cls, node: etree._Element) -> Element:
        """Converts an :code:`lxml` element and its descendants, dropping
        comments and processing instructions

        :param node: Parsed markup element
        :type node: lxml.etree._Element

        :return: Converted element tree
        :rtype: Element
        """
        return cls(etree.QName(node).localname,
                   {str(k): str(v) for k, v in node.attrib.items()},
                   [cls.from_xml(c) for c in node if isinstance(c.tag, str)],
                   node.text.strip() if node.text else '',
                   node.sourceline)

    # Attributes
    def has_attribute(self, key: str) -> bool:
        return key in self.attributes

    def get(self, key: str, default: typ.Any = None, type_: type = str,
            errors: Errors | None = None) -> tuple[typ.Any, bool]:
        """Typed lookup of an attribute, falling back to the value of the first
        child element with the same name

        :param key: Attribute or child element name
        :type key: str

        :param default: Value returned when absent or invalid, defaults to None
        :type default: typing.Any, optional

        :param type_: Requested value type, defaults to str
        :type type_: type, optional

        :param errors: Error list receiving :code:`ATTRIBUTE_INVALID` on
            conversion failure, defaults to None
        :type errors: sdf_dom.errors.Errors | None, optional

        :raises ValueError: If conversion fails and no error list is supplied

        :return: Value and whether it was found in the element
        :rtype: tuple[typing.Any, bool]
        """
        if key in self.attributes:
            text = self.attributes[key]
        else:
            child = self.get_element(key)
            if child is None:
                return default, False
            text = child.value

        try:
            return _CONVERTERS[type_](text), True
        except ValueError as err:
            if errors is None:
                raise
            errors.append(Error(ErrorCode.ATTRIBUTE_INVALID,
                f"Unable to read [{key}] of <{self.name}>{self._location()}: {err}"))
            return default, True

    # Children
    def has_element(self, name: str) -> bool:
        return self.get_element(name) is not None

    def get_element(self, name: str) -> Element | None:
        """Returns first child element of kind :code:`name` or None"""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def elements(self, name: str | None = None) -> list[Element]:
        """Returns ordered child elements, optionally filtered by kind"""
        if name is None:
            return list(self.children)
        return [c for c in self.children if c.name == name]

    def add_element(self, child: Element) -> Element:
        self.children.append(child)
        return child

    def _location(self) -> str:
        return f" (line {self.line})" if self.line is not None else ''

    def __repr__(self) -> str:
        return f"Element(<{self.name}>, {self.attributes}, {len(self.children)} children)"

def read_file(path: str | os.PathLike) -> Element:
    """Parses an SDF file into an element tree

    :raises OSError: If the file cannot be read
    :raises lxml.etree.XMLSyntaxError: If the markup is malformed
    """
    parser = etree.XMLParser(remove_comments=True)
    return Element.from_xml(etree.parse(os.fspath(path), parser).getroot())

def read_string(text: str) -> Element:
    """Parses SDF markup text into an element tree

    :raises lxml.etree.XMLSyntaxError: If the markup is malformed
    """
    parser = etree.XMLParser(remove_comments=True)
    return Element.from_xml(etree.fromstring(text.encode('utf-8'), parser))
