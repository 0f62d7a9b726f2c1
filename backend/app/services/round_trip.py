"""Serialize an Employee both ways, read it back and compare."""

from __future__ import annotations

import logging

from app.models.employee import Employee, RoundTripResult
from app.services.property_helper import declared_properties
from app.services.serialization_service import (
    InvalidArgumentError,
    SerializationError,
    from_json,
    from_xml,
    to_json,
    to_xml,
)

logger = logging.getLogger(__name__)

JSON_DECODE_FAILED = "JSON deserialization failed."
XML_DECODE_FAILED = "XML deserialization failed."
JSON_MISMATCH = "Deserialized JSON employee does not match the original."
XML_MISMATCH = "Deserialized XML employee does not match the original."


class RoundTripError(Exception):
    pass


def differing_properties(first: Employee | None, second: Employee | None) -> list[str]:
    if first is None or second is None:
        return list(declared_properties(Employee))
    return [
        name
        for name in declared_properties(Employee)
        if getattr(first, name) != getattr(second, name)
    ]


def employees_equal(first: Employee | None, second: Employee | None) -> bool:
    """Property-by-property value equality; ``None`` equals nothing, not even ``None``."""
    if first is None or second is None:
        return False
    return not differing_properties(first, second)


def verify_round_trip(employee: Employee | None) -> RoundTripResult:
    if employee is None:
        raise InvalidArgumentError("employee must not be None")

    serialized_json = to_json(employee)
    serialized_xml = to_xml(employee)

    try:
        from_json_employee = from_json(serialized_json)
    except SerializationError as e:
        logger.error("JSON round trip could not decode: %s", e)
        raise RoundTripError(JSON_DECODE_FAILED) from e

    try:
        from_xml_employee = from_xml(serialized_xml)
    except SerializationError as e:
        logger.error("XML round trip could not decode: %s", e)
        raise RoundTripError(XML_DECODE_FAILED) from e

    if not employees_equal(employee, from_json_employee):
        logger.warning(
            "JSON round trip mismatch for employee %s",
            employee.id,
            extra={"differing": differing_properties(employee, from_json_employee)},
        )
        raise RoundTripError(JSON_MISMATCH)

    if not employees_equal(employee, from_xml_employee):
        logger.warning(
            "XML round trip mismatch for employee %s",
            employee.id,
            extra={"differing": differing_properties(employee, from_xml_employee)},
        )
        raise RoundTripError(XML_MISMATCH)

    return RoundTripResult(
        original_employee=employee,
        serialized_json=serialized_json,
        serialized_xml=serialized_xml,
        deserialized_employee_from_json=from_json_employee,
        deserialized_employee_from_xml=from_xml_employee,
    )
