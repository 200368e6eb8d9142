"""Built-in codecs for the json, xml and txt formats."""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping

from pydantic import BaseModel

from ..constants import Format
from .registry import Codec

XML_DEFAULT_ROOT = "response"
XML_LIST_ITEM = "item"
XML_TEXT_KEY = "#text"

_INVALID_TAG_CHARS = re.compile(r"[^\w.\-]")
_VALID_TAG_START = re.compile(r"[^\W\d]")


def encode_json(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value)


def decode_json(body: bytes) -> Any:
    return json.loads(body)


def xml_tag(key: Any) -> str:
    """Turn a mapping key into a well-formed element name.

    Characters not allowed in names become "_", and names that do not start
    with a letter or "_" get a "_" prefix ("first name" -> "first_name",
    "1x" -> "_1x").
    """
    tag = _INVALID_TAG_CHARS.sub("_", str(key))
    if not _VALID_TAG_START.match(tag):
        tag = "_" + tag
    return tag


def _build_element(tag: str, value: Any) -> ET.Element:
    element = ET.Element(xml_tag(tag))
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping):
        for key, child in value.items():
            element.append(_build_element(str(key), child))
    elif isinstance(value, (list, tuple)):
        for child in value:
            element.append(_build_element(XML_LIST_ITEM, child))
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif value is not None:
        element.text = str(value)
    return element


def encode_xml(value: Any) -> bytes:
    """Serialize a value to an XML document.

    A mapping with exactly one key uses that key as the root element; anything
    else is wrapped in a ``<response>`` root. Sequence members become
    ``<item>`` elements.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping) and len(value) == 1:
        (tag, child), = value.items()
        root = _build_element(str(tag), child)
    else:
        root = _build_element(XML_DEFAULT_ROOT, value)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    text = element.text.strip() if element.text else ""
    if not children and not element.attrib:
        return text or None

    result: Dict[str, Any] = dict(element.attrib)
    for child in children:
        value = _element_to_value(child)
        if child.tag in result:
            # Repeated tags collect into a list
            existing = result[child.tag]
            if not isinstance(existing, list):
                result[child.tag] = [existing]
            result[child.tag].append(value)
        else:
            result[child.tag] = value
    if text:
        result[XML_TEXT_KEY] = text
    return result


def decode_xml(body: bytes) -> Dict[str, Any]:
    """Parse an XML document into ``{root_tag: value}``.

    Leaf elements become their text, elements with children become dicts and
    attributes are merged in as keys.
    """
    root = ET.fromstring(body)
    return {root.tag: _element_to_value(root)}


def encode_txt(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        return value
    return str(value)


DEFAULT_CODECS = {
    Format.JSON.value: Codec(encode=encode_json, decode=decode_json),
    Format.XML.value: Codec(encode=encode_xml, decode=decode_xml),
    Format.TXT.value: Codec(encode=encode_txt),
}
