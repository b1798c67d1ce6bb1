"""
Pydantic request/response schemas.

Field types in here carry the validation rule pipelines (see
app/validation.py); route signatures use them for path, query and body
parameters so FastAPI validates everything before a handler runs.
"""
