"""Customer table mapping (`customer`: CUST_CODE, CUST_NAME)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

CUST_CODE_LENGTH = 6


class Customer(Base):
    """A customer, listed by name and deleted by its 6-character code."""

    __tablename__ = "customer"

    cust_code: Mapped[str] = mapped_column(
        "CUST_CODE", String(CUST_CODE_LENGTH), primary_key=True
    )
    cust_name: Mapped[str] = mapped_column("CUST_NAME", String(40))

    def __repr__(self) -> str:
        return f"<Customer(code={self.cust_code}, name={self.cust_name!r})>"
