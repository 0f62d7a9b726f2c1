"""Employee models shared by the HTTP layer and the serialization services."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Value of DateOfBirth on an Employee nobody has filled in
DEFAULT_DATE_OF_BIRTH = datetime.min


class Employee(BaseModel):
    """An employee row as seen by API clients.

    Field order is the declared property order used by the serializers and the
    equality check: Id, FirstName, LastName, DateOfBirth, Email.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int = 0
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: datetime = DEFAULT_DATE_OF_BIRTH
    email: str | None = None


class EmployeeForm(Employee):
    """Employee as submitted by the create/edit forms.

    ``row_version`` is the concurrency token handed out by the edit form. When
    it is sent back, the update only succeeds if the row has not changed since.
    """

    row_version: int | None = None


class EmployeeDetails(BaseModel):
    """Read-only projection used by the employee list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    full_name: str
    email: str | None = None


class RoundTripResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_employee: Employee
    serialized_json: str
    serialized_xml: str
    deserialized_employee_from_json: Employee
    deserialized_employee_from_xml: Employee
