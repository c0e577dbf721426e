"""
Reelbase Backend — Employee Service
=====================================

What:  Plain CRUD over the employees collection, keyed by the store-assigned
       `_id`. No business rules beyond translating "not there" into
       NotFoundError.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId

from reelbase.exceptions import NotFoundError, store_operation
from reelbase.schemas.employee import EmployeeCreate, EmployeeUpdate
from reelbase.store.base import DocumentCollection

logger = logging.getLogger(__name__)


def employee_query(employee_id: str) -> Dict[str, Any]:
    """
    Filter for one employee by identity.

    Raises NotFoundError for strings that are not ObjectIds, since no stored
    employee can carry such an `_id`.
    """
    try:
        return {"_id": ObjectId(employee_id)}
    except (InvalidId, TypeError):
        raise NotFoundError(resource="Employee", resource_id=employee_id)


class EmployeeService:
    def __init__(self, employees: DocumentCollection):
        self.employees = employees

    async def list_all(self) -> List[Dict[str, Any]]:
        with store_operation("Error retrieving employees"):
            return await self.employees.find()

    async def get(self, employee_id: str) -> Dict[str, Any]:
        query = employee_query(employee_id)
        with store_operation("Error retrieving employee"):
            employee = await self.employees.find_one(query)
        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        return employee

    async def create(self, payload: EmployeeCreate) -> List[Dict[str, Any]]:
        """
        Insert an employee and return the whole collection afterwards.

        Only fields present in the body are stored; omitted ones stay absent.
        """
        with store_operation("Error creating employee"):
            employee = await self.employees.insert_one(payload.model_dump(exclude_unset=True))
            logger.info("Created employee %s", employee["_id"])
            return await self.employees.find()

    async def update(self, employee_id: str, payload: EmployeeUpdate) -> Dict[str, Any]:
        query = employee_query(employee_id)
        changes = payload.changes()
        with store_operation("Error updating employee"):
            if changes:
                employee = await self.employees.find_one_and_update(query, changes)
            else:
                employee = await self.employees.find_one(query)
        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        return employee

    async def delete(self, employee_id: str) -> Dict[str, Any]:
        query = employee_query(employee_id)
        with store_operation("Error deleting employee"):
            employee = await self.employees.find_one_and_delete(query)
        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        logger.info("Deleted employee %s", employee_id)
        return employee
