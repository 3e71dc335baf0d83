"""
Snippetbox — Routes Package
============================

Route Inventory:
    - snippets.py: GET  /, GET /snippet/view/{id}, GET/POST /snippet/create
    - users.py:    GET/POST /user/signup, GET/POST /user/login,
                   POST /user/logout, GET /account/view
    - health.py:   GET  /health

Routes stay thin: read the request, call a service, render a page.
"""
