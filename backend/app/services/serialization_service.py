"""JSON and XML encoders for Employee.

The two encodings deliberately differ. JSON renames ``Email`` to
``email_address`` and leaves ``DateOfBirth`` out, so a JSON round trip loses the
date of birth. XML writes every property under its own name and is lossless.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from app.models.employee import Employee

logger = logging.getLogger(__name__)

# Employee properties in declared order: (python attribute, external name)
_FIELD_MAP: list[tuple[str, str]] = [
    ("id", "Id"),
    ("first_name", "FirstName"),
    ("last_name", "LastName"),
    ("date_of_birth", "DateOfBirth"),
    ("email", "Email"),
]

JSON_NAME_OVERRIDES: dict[str, str] = {"Email": "email_address"}
JSON_EXCLUDED: frozenset[str] = frozenset({"DateOfBirth"})

XML_ROOT_TAG = "Employee"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
JSON_INDENT = 2


class InvalidArgumentError(ValueError):
    pass


class SerializationError(Exception):
    pass


def json_property_name(name: str) -> str:
    return JSON_NAME_OVERRIDES.get(name, name)


def _json_fields() -> list[tuple[str, str]]:
    return [
        (attr, json_property_name(name))
        for attr, name in _FIELD_MAP
        if name not in JSON_EXCLUDED
    ]


def _lookup(document: dict[str, Any], key: str) -> tuple[bool, Any]:
    if key in document:
        return True, document[key]
    lowered = key.lower()
    for candidate, value in document.items():
        if candidate.lower() == lowered:
            return True, value
    return False, None


def _build(data: dict[str, Any], source: str) -> Employee:
    try:
        return Employee.model_validate(data)
    except ValidationError as e:
        logger.error("%s value conversion failed: %s", source, e)
        raise SerializationError(f"Invalid {source} employee document: {e}") from e


def to_json(employee: Employee | None) -> str:
    if employee is None:
        raise InvalidArgumentError("employee must not be None")

    document: dict[str, Any] = {}
    for attr, key in _json_fields():
        document[key] = getattr(employee, attr)
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)


def from_json(text: str | None) -> Employee:
    if not text:
        raise InvalidArgumentError("json must not be empty")

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Malformed JSON: {e}") from e
    if not isinstance(document, dict):
        raise SerializationError(f"Expected a JSON object, got {type(document).__name__}")

    data: dict[str, Any] = {}
    for attr, key in _json_fields():
        found, value = _lookup(document, key)
        if found:
            data[attr] = value
    return _build(data, "JSON")


def _xml_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def to_xml(employee: Employee | None) -> str:
    if employee is None:
        raise InvalidArgumentError("employee must not be None")

    root = ET.Element(XML_ROOT_TAG)
    for attr, name in _FIELD_MAP:
        value = getattr(employee, attr)
        if value is None:
            continue
        ET.SubElement(root, name).text = _xml_text(value)
    ET.indent(root, space="  ")
    # Parsers fold a raw \r into \n, a character reference survives
    body = ET.tostring(root, encoding="unicode").replace("\r", "&#13;")
    return f"{XML_DECLARATION}\n{body}"


def from_xml(text: str | None) -> Employee:
    if not text:
        raise InvalidArgumentError("xml must not be empty")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SerializationError(f"Malformed XML: {e}") from e
    if root.tag != XML_ROOT_TAG:
        raise SerializationError(f"Expected <{XML_ROOT_TAG}> root element, got <{root.tag}>")

    data: dict[str, Any] = {}
    for attr, name in _FIELD_MAP:
        element = root.find(name)
        if element is None:
            continue
        # <FirstName /> is an empty string, a missing element is None
        data[attr] = element.text or ""
    return _build(data, "XML")
