"""
Read-only catalog tables: `student` (NAME) and `foods` (ITEM_NAME).

Only the name column is ever selected. The ORM needs an identity column, so
the name doubles as the mapped primary key; the store's real key is not
visible to this service.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Student(Base):
    __tablename__ = "student"

    name: Mapped[str] = mapped_column("NAME", String(50), primary_key=True)


class FoodItem(Base):
    __tablename__ = "foods"

    item_name: Mapped[str] = mapped_column("ITEM_NAME", String(50), primary_key=True)
