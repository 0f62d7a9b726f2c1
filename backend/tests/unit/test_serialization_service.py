from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from app.models.employee import DEFAULT_DATE_OF_BIRTH, Employee
from app.services.serialization_service import (
    InvalidArgumentError,
    SerializationError,
    from_json,
    from_xml,
    json_property_name,
    to_json,
    to_xml,
)


@pytest.fixture
def grace():
    return Employee(id=7, first_name="Grace", last_name="Hopper", email="grace@navy.mil")


def test_to_json_keys_in_declared_order_without_date_of_birth(ada):
    document = json.loads(to_json(ada))

    assert list(document) == ["Id", "FirstName", "LastName", "email_address"]
    assert "DateOfBirth" not in document
    assert "dateOfBirth" not in document


def test_to_json_renames_email(grace):
    document = json.loads(to_json(grace))

    assert document["email_address"] == "grace@navy.mil"
    assert "Email" not in document


def test_to_json_uses_natural_types(grace):
    document = json.loads(to_json(grace))

    assert document["Id"] == 7
    assert document["FirstName"] == "Grace"


def test_to_json_is_indented(grace):
    text = to_json(grace)
    assert text.startswith("{\n  \"Id\": 7,")


def test_to_json_none_raises():
    with pytest.raises(InvalidArgumentError):
        to_json(None)


def test_json_property_name_override():
    assert json_property_name("Email") == "email_address"
    assert json_property_name("FirstName") == "FirstName"


def test_from_json_reads_fields(grace):
    result = from_json(to_json(grace))

    assert result == grace


def test_from_json_matches_keys_case_insensitively():
    text = json.dumps({"id": 3, "FIRSTNAME": "Ada", "lastname": "Lovelace", "EMAIL_ADDRESS": "ada@x.com"})

    result = from_json(text)

    assert result.id == 3
    assert result.first_name == "Ada"
    assert result.last_name == "Lovelace"
    assert result.email == "ada@x.com"


def test_from_json_prefers_exact_key_match():
    text = json.dumps({"firstname": "lower", "FirstName": "exact"})
    assert from_json(text).first_name == "exact"


def test_from_json_absent_keys_keep_defaults():
    result = from_json("{}")

    assert result.id == 0
    assert result.first_name is None
    assert result.email is None
    assert result.date_of_birth == DEFAULT_DATE_OF_BIRTH


def test_from_json_never_reads_date_of_birth():
    text = json.dumps({"Id": 1, "DateOfBirth": "1815-12-10T00:00:00"})
    assert from_json(text).date_of_birth == DEFAULT_DATE_OF_BIRTH


def test_from_json_ignores_plain_email_key():
    text = json.dumps({"Email": "ada@x.com"})
    assert from_json(text).email is None


def test_from_json_empty_input_raises():
    with pytest.raises(InvalidArgumentError):
        from_json("")


def test_from_json_malformed_raises():
    with pytest.raises(SerializationError, match="Malformed JSON"):
        from_json("{not json")


def test_from_json_non_object_raises():
    with pytest.raises(SerializationError, match="Expected a JSON object"):
        from_json("[1, 2]")


def test_from_json_unconvertible_value_raises():
    with pytest.raises(SerializationError):
        from_json(json.dumps({"Id": "seven"}))


def test_to_xml_contains_all_properties_verbatim(ada):
    text = to_xml(ada)
    assert text.startswith('<?xml version="1.0" encoding="utf-8"?>')

    root = ET.fromstring(text)
    assert root.tag == "Employee"
    assert [child.tag for child in root] == ["Id", "FirstName", "LastName", "DateOfBirth", "Email"]
    assert root.findtext("DateOfBirth") == "1815-12-10T00:00:00"
    assert root.findtext("Email") == "ada@x.com"


def test_to_xml_omits_none_strings():
    root = ET.fromstring(to_xml(Employee(id=1)))
    assert [child.tag for child in root] == ["Id", "DateOfBirth"]


def test_to_xml_none_raises():
    with pytest.raises(InvalidArgumentError):
        to_xml(None)


def test_from_xml_reconstructs_every_field(ada):
    assert from_xml(to_xml(ada)) == ada


def test_from_xml_keeps_empty_and_missing_strings_apart():
    employee = Employee(id=2, first_name="", last_name=None)

    result = from_xml(to_xml(employee))

    assert result.first_name == ""
    assert result.last_name is None


def test_from_xml_keeps_surrounding_whitespace():
    employee = Employee(first_name="  Ada ", last_name="de\nMorgan")
    assert from_xml(to_xml(employee)) == employee


def test_from_xml_preserves_time_components():
    employee = Employee(date_of_birth=datetime(1990, 5, 17, 13, 45, 12, 123456))
    assert from_xml(to_xml(employee)).date_of_birth == employee.date_of_birth


@pytest.mark.parametrize("text", ["", None])
def test_from_xml_empty_input_raises(text):
    with pytest.raises(InvalidArgumentError):
        from_xml(text)


def test_from_xml_malformed_raises():
    with pytest.raises(SerializationError, match="Malformed XML"):
        from_xml("<Employee><Id>1</Id>")


def test_from_xml_wrong_root_raises():
    with pytest.raises(SerializationError, match="Expected <Employee>"):
        from_xml("<Person><Id>1</Id></Person>")


def test_from_xml_unconvertible_value_raises():
    with pytest.raises(SerializationError):
        from_xml("<Employee><DateOfBirth>yesterday</DateOfBirth></Employee>")


def test_from_xml_keeps_carriage_returns():
    employee = Employee(first_name="Ada\r\nAugusta", last_name="Love\rlace")

    text = to_xml(employee)

    assert "\r" not in text
    assert "Ada&#13;\nAugusta" in text
    assert from_xml(text) == employee
