"""Read-only name listings for students and foods."""

from typing import List

from sqlalchemy import select

from app.database import ConnectionProvider
from app.models.catalog import FoodItem, Student
from app.services.pipeline import fetch_names


class CatalogService:
    async def list_student_names(self, provider: ConnectionProvider) -> List[str]:
        return await fetch_names(provider, select(Student.__table__.c.NAME), "students")

    async def list_food_names(self, provider: ConnectionProvider) -> List[str]:
        return await fetch_names(provider, select(FoodItem.__table__.c.ITEM_NAME), "foods")


catalog_service = CatalogService()
