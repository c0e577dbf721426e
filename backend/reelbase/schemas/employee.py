"""
Reelbase Backend — Employee Schemas
=====================================

Employees are plain records with no business rules: name, age, salary, all
optional, identified by the store-assigned `_id`.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = None
    age: Optional[int] = None
    salary: Optional[float] = None


class EmployeeUpdate(EmployeeCreate):
    """Fields omitted from the body are left untouched."""

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(alias="_id", description="Store identity (ObjectId hex)")
    name: Optional[str] = None
    age: Optional[int] = None
    salary: Optional[float] = None
