"""
FastAPI dependencies exposing the process-wide resources created in the
lifespan (see main.py).

Only the provider is injected, never a connection: a request that fails
validation must not lease one.
"""

from fastapi import Request

from app.database import ConnectionProvider
from app.services.function_client import FunctionClient


def get_connection_provider(request: Request) -> ConnectionProvider:
    return request.app.state.connection_provider


def get_function_client(request: Request) -> FunctionClient:
    return request.app.state.function_client
