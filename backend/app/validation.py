"""
Registry API — Field Validation Rules
=======================================

What:  Declarative, order-sensitive rules applied to path, query and body
       fields before any store work happens.
How:   Each rule is a plain function. A field type is an `Annotated` string
       whose `AfterValidator`s run left to right, so the declaration order is
       the execution order:

           KeywordField = Annotated[
               StrictStr,                         # isString
               AfterValidator(escape),
               AfterValidator(trim),
               AfterValidator(length(1, 100, ...)),
           ]

       `exists` is expressed by declaring the parameter without a default.
       FastAPI runs every parameter's validators and collects all failures
       into one RequestValidationError; `format_errors` turns that into the
       API's ``{"errors": [...]}`` list without dropping any entry.

Rules:
    trim      strip leading/trailing whitespace
    escape    replace & < > " ' / \\ ` with HTML entities (output safety only,
              values reach the store as bound parameters)
    length    fail when the current value length is outside [min, max]
    exists    fail when the field is absent
    isString  fail when the value is not a string (no number coercion)
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic_core import PydanticCustomError

_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}

# Messages for failures raised by pydantic itself rather than by our rules,
# keyed by (field, pydantic error type). A failure that stops the pipeline
# early also reports the later rules it would have failed, one entry each.
_BUILTIN_MESSAGES: Dict[tuple, Tuple[str, ...]] = {
    ("keyword", "missing"): (
        "keyword query parameter is missing",
        "Keyword must be a string",
        "Keyword length must be between 1 and 100 characters",
    ),
    ("keyword", "string_type"): ("Keyword must be a string",),
}


def trim(value: str) -> str:
    return value.strip()


def escape(value: str) -> str:
    return "".join(_ESCAPES.get(char, char) for char in value)


def length(
    min_length: int, max_length: int, message: Optional[str] = None
) -> Callable[[str], str]:
    """
    Build a length rule for the inclusive range [min_length, max_length].

    The failure is raised as a PydanticCustomError so the message reaches
    the client verbatim, without pydantic's "Value error, " prefix.
    """
    template = message or "Must be between {min_length} and {max_length} characters"

    def check_length(value: str) -> str:
        if not min_length <= len(value) <= max_length:
            raise PydanticCustomError(
                "string_length",
                template,
                {"min_length": min_length, "max_length": max_length},
            )
        return value

    return check_length


def _field_name(loc: Sequence[Any]) -> str:
    # loc looks like ("body", "companyName"), ("path", "custCode") or ("body",)
    names = [str(part) for part in loc[1:] if isinstance(part, str)]
    if names:
        return ".".join(names)
    return str(loc[0]) if loc else "request"


def _messages_for(field: str, error: Dict[str, Any]) -> Tuple[str, ...]:
    override = _BUILTIN_MESSAGES.get((field, error.get("type")))
    if override:
        return override
    if error.get("type") == "missing":
        return (f"{field} is required",)
    if error.get("type") == "string_type":
        return (f"{field} must be a string",)
    return (str(error.get("msg", "Invalid value")),)


def format_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Convert FastAPI/pydantic error dicts into the API's error entries.

    Order is preserved (path, query, then body, as FastAPI reports them).
    Each entry has `field`, `message` and `location`; `value` is included
    when the client actually sent one. A missing `keyword` yields three
    entries (exists, isString, length), as its whole rule chain fails.
    """
    formatted = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        field = _field_name(loc)
        value = error.get("input")
        for message in _messages_for(field, error):
            entry: Dict[str, Any] = {
                "field": field,
                "message": message,
                "location": str(loc[0]) if loc else "request",
            }
            if error.get("type") != "missing" and isinstance(value, (str, int, float, bool)):
                entry["value"] = value
            formatted.append(entry)
    return formatted
