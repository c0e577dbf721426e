# Services package init
"""
Reelbase Backend — Services Layer
===================================

What:  Business logic between routes (HTTP) and the document store.
How:   Each service wraps one DocumentCollection handed to it at
       construction; routes receive services through FastAPI dependencies.

Service Inventory:
    - MovieService: identifier resolution, default-filling inserts,
      Title/Released-only updates
    - EmployeeService: plain CRUD keyed by store identity
"""
