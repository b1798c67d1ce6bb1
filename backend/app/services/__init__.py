# Services package init
"""
Registry API — Services Layer
===============================

Service Inventory:
    - mutations:        builds parameterized statements per mutation kind
    - reconciler:       maps execution results to HTTP outcomes
    - pipeline:         acquire → build → execute → release → reconcile
    - CompanyService:   create, partial update and upsert for companies
    - CustomerService:  customer listing and delete-by-code
    - CatalogService:   student and food name listings
    - FunctionClient:   passthrough call to the external function
"""
