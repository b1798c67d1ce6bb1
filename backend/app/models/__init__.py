"""
Table mappings for the records the API reads and writes.

The schema itself belongs to the relational store; these classes describe
only the columns the request pipeline touches so statements can be built
against them.
"""

from app.models.catalog import FoodItem, Student
from app.models.company import Company
from app.models.customer import Customer

__all__ = ["Company", "Customer", "FoodItem", "Student"]
