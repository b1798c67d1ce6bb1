"""
Schemas for GET /say.

keyword pipeline: exists → isString → escape → trim → length(1, 100).
Escaping runs before the length check, so the limit applies to the
escaped text.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, StrictStr

from app.validation import escape, length, trim

KEYWORD_MAX = 100

KeywordField = Annotated[
    StrictStr,
    AfterValidator(escape),
    AfterValidator(trim),
    AfterValidator(
        length(1, KEYWORD_MAX, "Keyword length must be between 1 and 100 characters")
    ),
]


class FunctionResponse(BaseModel):
    response: Any = Field(description="Upstream JSON body, relayed verbatim")
