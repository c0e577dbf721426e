# Routes package init
"""
Reelbase Backend — Routes Package
===================================

Route Inventory:
    - movies.py:     /api/movies JSON API and the form targets it receives
    - views.py:      /, /movie/{id}, /add, /edit/{id}, /delete/{id} (HTML)
    - employees.py:  /api/employees REST CRUD
    - health.py:     GET /health

Routes stay thin: read the request, call a service, shape the response.
"""
