"""
Registry API — Application Package
====================================

Layers:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← typed params carry field rules
    ├─────────────────────────────────────┤
    │   Services (pipeline, mutations,    │  ← build → execute → reconcile
    │   reconciler, function client)      │
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← table mappings + pydantic
    ├─────────────────────────────────────┤
    │   Database (Connection Provider)    │  ← scoped pooled connections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
