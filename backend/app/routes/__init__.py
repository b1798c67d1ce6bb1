# Routes package init
"""
Registry API — Routes Package
===============================

Route Inventory:
    - company.py:    POST  /api/company
                     PATCH /api/company/{companyId}
                     PUT   /api/company/{companyId}
    - customers.py:  GET    /api/customers
                     DELETE /api/customers/{custCode}
    - catalog.py:    GET /api/students, GET /api/foods
    - proxy.py:      GET /say?keyword=
    - health.py:     GET /health

Routes stay thin: typed parameters carry the validation rules, services run
the pipeline, and routes only turn the Outcome into a response.
"""
