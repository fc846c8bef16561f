# Routes package init
"""
StickyBoard Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - accounts.py:  POST/GET /api/accounts, GET /api/accounts/{id}/groups
    - groups.py:    POST /api/groups, GET /api/groups/{id},
                    GET/POST /api/groups/{id}/users,
                    GET/POST/DELETE /api/groups/{id}/notes
    - notes.py:     GET/PATCH/DELETE /api/notes/{id}, PATCH /api/notes/{id}/position
    - summaries.py: POST /api/summarize, GET /api/summaries[/{id}]
    - health.py:    GET /health

Routes stay thin: they read the request, call a service and shape the
response. Business rules live in app/services.
"""
