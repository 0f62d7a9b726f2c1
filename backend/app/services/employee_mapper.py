from __future__ import annotations

from typing import Iterable

from app.models.employee import Employee, EmployeeDetails


def full_name(first_name: str | None, last_name: str | None) -> str:
    # Absent parts render as empty strings, never as "None"
    return f"{first_name or ''} {last_name or ''}"


def to_details(employee: Employee) -> EmployeeDetails:
    return EmployeeDetails(
        id=employee.id,
        full_name=full_name(employee.first_name, employee.last_name),
        email=employee.email,
    )


def to_details_list(employees: Iterable[Employee]) -> list[EmployeeDetails]:
    return [to_details(e) for e in employees]
