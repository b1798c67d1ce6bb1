"""Response schemas for the read-only name listings."""

from typing import List

from pydantic import BaseModel


class StudentListResponse(BaseModel):
    studentList: List[str]


class FoodListResponse(BaseModel):
    foodList: List[str]
