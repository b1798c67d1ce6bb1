"""Customer schemas. custCode runs a single rule: length(6, 6), no trim."""

from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, StrictStr

from app.models.customer import CUST_CODE_LENGTH
from app.validation import length

CustCodeField = Annotated[
    StrictStr,
    AfterValidator(
        length(CUST_CODE_LENGTH, CUST_CODE_LENGTH, "Customer code must be 6 characters long")
    ),
]


class CustomerListResponse(BaseModel):
    customerList: List[str]
