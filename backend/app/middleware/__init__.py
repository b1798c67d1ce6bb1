# Middleware package init
"""
Registry API — Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every error body carry
    the same correlation ID.
"""
