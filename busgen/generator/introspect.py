"""D-Bus introspection XML loader."""

import xml.dom.minidom
from xml.dom.minidom import Element
from xml.parsers.expat import ExpatError

from .types import Arg, ArgDirection, Interface, Method, Property, PropertyAccess, Signal


class ValidationError(RuntimeError):
    """Raised when introspection data is malformed."""


def _children(element: Element, tag: str) -> list[Element]:
    # getElementsByTagName would also descend into nested <node>s
    return [
        child
        for child in element.childNodes
        if child.nodeType == child.ELEMENT_NODE and child.tagName == tag
    ]


def _required(element: Element, attribute: str, context: str) -> str:
    value = element.getAttribute(attribute)
    if not value:
        raise ValidationError(f"{context}: <{element.tagName}> is missing '{attribute}'")
    return value


def _arg(element: Element, context: str) -> Arg:
    direction = element.getAttribute("direction") or None
    if direction is not None:
        try:
            direction = ArgDirection(direction)
        except ValueError as e:
            raise ValidationError(f"{context}: unknown direction '{direction}'") from e

    return Arg(
        type=_required(element, "type", context),
        name=element.getAttribute("name") or None,
        direction=direction,
    )


def _method(element: Element, iface: str) -> Method:
    name = _required(element, "name", iface)
    context = f"{iface}.{name}"
    return Method(
        name=name,
        args=[_arg(a, context) for a in _children(element, "arg")],
    )


def _signal(element: Element, iface: str) -> Signal:
    name = _required(element, "name", iface)
    context = f"{iface}.{name}"
    return Signal(
        name=name,
        args=[_arg(a, context) for a in _children(element, "arg")],
    )


def _property(element: Element, iface: str) -> Property:
    name = _required(element, "name", iface)
    context = f"{iface}.{name}"
    access = _required(element, "access", context)
    try:
        access = PropertyAccess(access)
    except ValueError as e:
        raise ValidationError(f"{context}: unknown access '{access}'") from e

    return Property(name=name, type=_required(element, "type", context), access=access)


def _interface(element: Element) -> Interface:
    name = _required(element, "name", "node")
    return Interface(
        name=name,
        methods=[_method(m, name) for m in _children(element, "method")],
        signals=[_signal(s, name) for s in _children(element, "signal")],
        properties=[_property(p, name) for p in _children(element, "property")],
    )


def parse(text: str) -> list[Interface]:
    """Parse introspection XML into the interfaces of its root node."""
    try:
        dom = xml.dom.minidom.parseString(text)
    except ExpatError as e:
        raise ValidationError(f"Invalid introspection XML: {e}") from e

    root = dom.documentElement
    if root.tagName != "node":
        raise ValidationError(f"Expected <node> root element, found <{root.tagName}>")

    return [_interface(i) for i in _children(root, "interface")]


def parse_file(path: str) -> list[Interface]:
    """Parse an introspection XML file."""
    with open(path, encoding="utf-8") as f:
        return parse(f.read())
