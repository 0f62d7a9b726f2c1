from __future__ import annotations

import logging

from fastapi import APIRouter, Body, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from app.models.employee import Employee, EmployeeDetails, EmployeeForm, RoundTripResult
from app.services.employee_mapper import to_details_list
from app.services.employee_service import (
    EmployeeConflictError,
    EmployeeNotFoundError,
    employee_service,
)
from app.services.round_trip import RoundTripError, verify_round_trip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Employee", tags=["employees"])


def _not_found(employee_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Employee with id {employee_id} not found",
    )


def _redirect_to_list(request: Request) -> RedirectResponse:
    return RedirectResponse(
        url=str(request.url_for("list_employees")),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("", response_model=list[EmployeeDetails])
async def list_employees():
    employees = await employee_service.list_employees()
    return to_details_list(employees)


@router.get("/Create", response_model=EmployeeForm)
async def create_form():
    return EmployeeForm()


@router.post("/Create")
async def create_employee(form: EmployeeForm, request: Request):
    employee = await employee_service.create_employee(form)
    logger.info("Employee %s created via form", employee.id)
    return _redirect_to_list(request)


@router.get("/Edit/{employee_id}", response_model=EmployeeForm)
async def edit_form(employee_id: int):
    form = await employee_service.get_employee_form(employee_id)
    if not form:
        raise _not_found(employee_id)
    return form


@router.post("/Edit/{employee_id}")
async def edit_employee(employee_id: int, form: EmployeeForm, request: Request):
    if form.id != employee_id:
        logger.warning("Edit path id %s does not match body id %s", employee_id, form.id)
        raise _not_found(employee_id)

    try:
        await employee_service.update_employee(employee_id, form)
    except EmployeeNotFoundError as err:
        raise _not_found(employee_id) from err
    except EmployeeConflictError as err:
        if not await employee_service.employee_exists(employee_id):
            raise _not_found(employee_id) from err
        logger.error("Edit of employee %s lost to a concurrent write", employee_id)
        raise

    return _redirect_to_list(request)


@router.get("/Delete/{employee_id}", response_model=Employee)
async def delete_confirmation(employee_id: int):
    employee = await employee_service.get_employee(employee_id)
    if not employee:
        raise _not_found(employee_id)
    return employee


@router.post("/Delete/{employee_id}")
async def delete_employee(employee_id: int, request: Request):
    deleted = await employee_service.delete_employee(employee_id)
    if not deleted:
        logger.info("Delete of employee %s skipped, row already gone", employee_id)
    return _redirect_to_list(request)


@router.post("/SerializeEmployee", response_model=RoundTripResult)
async def serialize_employee(employee: Employee | None = Body(None)):  # noqa: B008
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee data is null.",
        )

    try:
        return verify_round_trip(employee)
    except RoundTripError as e:
        logger.error("Round trip failed for employee %s: %s", employee.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
