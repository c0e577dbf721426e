"""
Reelbase Backend — Employee API Route Handlers
================================================

Standard REST CRUD at /api/employees. Identity is the store-assigned `_id`.
Creating an employee answers with the full employee list.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status

from reelbase.dependencies import get_employee_service
from reelbase.routes.payload import parse_model, read_payload
from reelbase.schemas.common import ErrorResponse, MessageResponse
from reelbase.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from reelbase.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Employees"])

NOT_FOUND = {"description": "Employee not found", "model": ErrorResponse}


@router.get("/employees", response_model=List[EmployeeResponse])
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> List[EmployeeResponse]:
    employees = await service.list_all()
    return [EmployeeResponse.model_validate(employee) for employee in employees]


@router.get(
    "/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: NOT_FOUND},
)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return EmployeeResponse.model_validate(await service.get(employee_id))


@router.post(
    "/employees",
    status_code=status.HTTP_201_CREATED,
    response_model=List[EmployeeResponse],
    summary="Create an employee and return all employees",
)
async def create_employee(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> List[EmployeeResponse]:
    payload = parse_model(EmployeeCreate, await read_payload(request), "Error creating employee")
    employees = await service.create(payload)
    return [EmployeeResponse.model_validate(employee) for employee in employees]


@router.put(
    "/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: NOT_FOUND},
)
async def update_employee(
    employee_id: str,
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    payload = parse_model(EmployeeUpdate, await read_payload(request), "Error updating employee")
    return EmployeeResponse.model_validate(await service.update(employee_id, payload))


@router.delete(
    "/employees/{employee_id}",
    response_model=MessageResponse,
    responses={404: NOT_FOUND},
)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    await service.delete(employee_id)
    return MessageResponse(message="Employee deleted successfully")
