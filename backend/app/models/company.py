"""
Company table mapping
=====================

What:  Maps the `company` table (COMPANY_ID, COMPANY_NAME, COMPANY_CITY).
Who:   The mutation builder targets `Company.__table__` for insert, partial
       update and upsert statements.

Column names are upper-case in the store and are kept verbatim; attribute
names are snake_case for Python callers.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

COMPANY_ID_MAX = 6
COMPANY_TEXT_MAX = 25


class Company(Base):
    """
    A company record keyed by a short identifier.

    Lifecycle:
        Created by POST (insert) or PUT (upsert), changed by PATCH or PUT.
        Never deleted through the API. The key is never rewritten.
    """

    __tablename__ = "company"

    company_id: Mapped[str] = mapped_column(
        "COMPANY_ID", String(COMPANY_ID_MAX), primary_key=True
    )
    company_name: Mapped[Optional[str]] = mapped_column(
        "COMPANY_NAME", String(COMPANY_TEXT_MAX), nullable=True
    )
    company_city: Mapped[Optional[str]] = mapped_column(
        "COMPANY_CITY", String(COMPANY_TEXT_MAX), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.company_id}, name={self.company_name!r})>"
