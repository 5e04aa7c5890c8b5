"""
HRMS Backend — Employee Route Handlers
=======================================

What:  GET/POST /employee and PUT/DELETE /employee/{employee_id}.
How:   Handlers read the raw body themselves and hand it to EmployeeService,
       so that on PUT a malformed id is rejected before the body is looked at
       and a malformed body yields 400 with the parse error (not FastAPI's 422).
       Failures surface as HRMSError subclasses rendered by main.py.
"""

from typing import List

from fastapi import APIRouter, Depends, Request

from hrms.schemas.employee import EmployeeIn, EmployeeResponse
from hrms.services.employee_service import EmployeeService, get_employee_service


router = APIRouter(tags=["Employees"])

DELETE_CONFIRMATION = "record deleted..."

# Documents the JSON body for OpenAPI; decoding happens in the service.
_EMPLOYEE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": EmployeeIn.model_json_schema()}},
    }
}


@router.get(
    "/employee",
    response_model=List[EmployeeResponse],
    response_model_exclude_none=True,
    responses={
        500: {"description": "Query failed (plain-text error)"},
    },
    summary="List all employees",
)
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> List[EmployeeResponse]:
    return await service.list_employees()


@router.post(
    "/employee",
    status_code=201,
    response_model=EmployeeResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed body (plain-text error)"},
        500: {"description": "Insert or read-back failed (plain-text error)"},
    },
    summary="Create an employee",
    openapi_extra=_EMPLOYEE_BODY,
)
async def create_employee(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    """
    Insert an employee and return the stored record.

    A client-supplied `id` is ignored; MongoDB assigns the identifier.
    """
    raw_body = await request.body()
    return await service.create_employee(raw_body)


@router.put(
    "/employee/{employee_id}",
    response_model=EmployeeResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed id (empty), malformed body (text) or unknown id (empty)"},
        500: {"description": "Update failed (empty body)"},
    },
    summary="Update an employee",
    openapi_extra=_EMPLOYEE_BODY,
)
async def update_employee(
    employee_id: str,
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    """
    Set name, salary and age on an existing employee.

    Responds with the submitted values and `id` equal to the path parameter.
    An unknown id answers 400, not 404.
    """
    raw_body = await request.body()
    return await service.update_employee(employee_id, raw_body)


@router.delete(
    "/employee/{employee_id}",
    response_model=str,
    responses={
        400: {"description": "Malformed id (plain-text error)"},
        404: {"description": "No employee with this id"},
        500: {"description": "Delete failed (empty body)"},
    },
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> str:
    await service.delete_employee(employee_id)
    return DELETE_CONFIRMATION
