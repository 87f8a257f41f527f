"""
Rentomatic Backend - API Routes Package
========================================

Route Inventory:
    - rooms.py:   GET /rooms    (list rooms, filter_<key> query parameters)
    - health.py:  GET /health   (service health check)

Routes are THIN: they build a request object, call a use case and map the
response envelope to an HTTP status. Business logic lives in use_cases/.
"""
