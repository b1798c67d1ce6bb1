"""
Registry API — Company Schemas
===============================

Rule pipelines (left to right):
    companyId    trim → length(1, 6) → escape
    companyName  trim → length(1, 25) → escape
    companyCity  trim → length(1, 25) → escape

Numbers in the body are taken as their string form ({"companyId": 101} is
"101"); other non-string values are rejected.

POST requires all three fields. PATCH and PUT take the key from the path and
accept both attributes as optional; PATCH additionally requires at least one
of them, which is checked by CompanyService before a connection is leased.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from app.models.company import COMPANY_ID_MAX, COMPANY_TEXT_MAX
from app.validation import escape, length, trim

CompanyIdField = Annotated[
    str,
    AfterValidator(trim),
    AfterValidator(length(1, COMPANY_ID_MAX, "ID must be between 1 and 6 characters")),
    AfterValidator(escape),
]

CompanyTextField = Annotated[
    str,
    AfterValidator(trim),
    AfterValidator(length(1, COMPANY_TEXT_MAX)),
    AfterValidator(escape),
]


class CompanyCreate(BaseModel):
    """Body of POST /api/company."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    company_id: CompanyIdField = Field(alias="companyId", description="Unique company identifier")
    company_name: CompanyTextField = Field(alias="companyName", description="Company name")
    company_city: CompanyTextField = Field(alias="companyCity", description="City of the company")


class CompanyChanges(BaseModel):
    """Body of PATCH and PUT /api/company/{companyId}."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    company_name: Optional[CompanyTextField] = Field(default=None, alias="companyName")
    company_city: Optional[CompanyTextField] = Field(default=None, alias="companyCity")

    def has_changes(self) -> bool:
        return self.company_name is not None or self.company_city is not None
