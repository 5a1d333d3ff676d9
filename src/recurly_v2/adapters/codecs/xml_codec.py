"""Codec XML (formato nativo de la API v2).

Convenciones del cable:
- Los escalares tipados llevan `type="integer|boolean|datetime|..."`.
- `nil="nil"` representa `None`.
- Las colecciones llevan `type="array"` y un hijo por elemento (tag en singular).
- Las referencias a otros recursos llegan como `<account href="..."/>` y las
  acciones como `<a name="cancel" href="..." method="put"/>`.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable
from xml.etree import ElementTree

from recurly_v2.core.domain.models import HREF_KEY, NODE_KEY, ErrorDetails, Link


def _parse_bool(text: str) -> bool:
    return text.lower() == "true"


_SCALAR_TYPES: dict[str, Callable[[str], Any]] = {
    "integer": int,
    "float": float,
    "decimal": Decimal,
    "boolean": _parse_bool,
    # pydantic valida fechas ISO-8601; se dejan como texto.
    "datetime": str,
    "date": str,
}


def singularize(tag: str) -> str:
    """Tag de cada elemento de un array: `add_ons` -> `add_on`, `currencies` -> `currency`."""

    if tag.endswith("ies"):
        return tag[:-3] + "y"
    if tag.endswith("sses") or tag.endswith("xes"):
        return tag[:-2]
    if tag.endswith("s") and not tag.endswith("ss"):
        return tag[:-1]
    return tag


def _looks_like_array(elem: ElementTree.Element, children: list[ElementTree.Element]) -> bool:
    # Contenedor en plural cuyos hijos son todos su singular, aunque haya uno solo.
    item_tag = singularize(elem.tag)
    if item_tag == elem.tag:
        return False
    return all(c.tag == item_tag for c in children)


def _decode_element(elem: ElementTree.Element) -> Any:
    if elem.attrib.get("nil") is not None:
        return None

    attr_type = elem.attrib.get("type")
    children = list(elem)

    if attr_type == "array":
        return [_decode_element(child) for child in children]

    if attr_type in _SCALAR_TYPES:
        text = (elem.text or "").strip()
        if not text:
            return None
        return _SCALAR_TYPES[attr_type](text)

    href = elem.attrib.get("href")
    if children:
        if _looks_like_array(elem, children):
            return [_decode_element(child) for child in children]
        data: dict[str, Any] = {}
        if href:
            data[HREF_KEY] = href
        for child in children:
            if child.tag == "a" and "name" in child.attrib:
                method = (child.attrib.get("method") or "").upper() or None
                data[child.attrib["name"]] = Link(href=child.attrib["href"], method=method)
                continue
            data[child.tag] = _decode_element(child)
        return data

    if href:
        return Link(href=href)

    return (elem.text or "").strip()


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _encode_value(tag: str, value: Any) -> ElementTree.Element:
    el = ElementTree.Element(tag)

    if isinstance(value, Enum):
        value = value.value

    if value is None:
        el.attrib["nil"] = "nil"
    elif isinstance(value, bool):
        el.attrib["type"] = "boolean"
        el.text = "true" if value else "false"
    elif isinstance(value, int):
        el.attrib["type"] = "integer"
        el.text = str(value)
    elif isinstance(value, datetime):
        el.attrib["type"] = "datetime"
        el.text = _format_datetime(value)
    elif isinstance(value, date):
        el.text = value.isoformat()
    elif isinstance(value, (float, Decimal)):
        el.text = str(value)
    elif isinstance(value, Link):
        el.attrib["href"] = value.href
    elif isinstance(value, Mapping):
        for key, sub_value in value.items():
            if key == HREF_KEY:
                el.attrib["href"] = str(sub_value)
                continue
            if key == NODE_KEY:
                continue
            el.append(_encode_value(str(key), sub_value))
    elif isinstance(value, (list, tuple)):
        el.attrib["type"] = "array"
        item_tag = singularize(tag)
        for item in value:
            own_tag = item.get(NODE_KEY) if isinstance(item, Mapping) else None
            el.append(_encode_value(own_tag or item_tag, item))
    else:
        el.text = str(value)

    return el


class XMLCodec:
    """Codec `application/xml` sobre `xml.etree.ElementTree`."""

    media_type = "application/xml"

    def encode(self, nodename: str, payload: Any) -> bytes:
        root = _encode_value(nodename, payload)
        return ElementTree.tostring(root, encoding="UTF-8", xml_declaration=True)

    def decode(self, body: bytes) -> tuple[str | None, Any]:
        if not body or not body.strip():
            return None, None
        root = ElementTree.fromstring(body)
        return root.tag, _decode_element(root)

    def decode_errors(self, body: bytes) -> ErrorDetails:
        if not body or not body.strip():
            return ErrorDetails()
        try:
            root = ElementTree.fromstring(body)
        except ElementTree.ParseError:
            return ErrorDetails(description=body.decode("utf-8", errors="replace").strip()[:500] or None)

        if root.tag == "error":
            return ErrorDetails(
                symbol=_text(root.find("symbol")),
                description=_text(root.find("description")),
                details=_text(root.find("details")),
            )

        details = ErrorDetails()
        for child in root:
            if child.tag == "error":
                message = _text(child) or ""
                field = child.attrib.get("field")
                if field:
                    details.field_errors.setdefault(field, []).append(message)
                    details.symbol = details.symbol or child.attrib.get("symbol")
                elif details.description is None:
                    details.description = message or _text(child.find("description"))
                    details.symbol = child.attrib.get("symbol") or _text(child.find("symbol"))
            elif child.tag == "transaction_error":
                details.transaction_error = {sub.tag: _text(sub) for sub in child}
        return details


def _text(elem: ElementTree.Element | None) -> str | None:
    if elem is None or elem.text is None:
        return None
    text = elem.text.strip()
    return text or None
