"""
Snippetbox — Middleware Package
================================

Middleware Chain (outermost first):
    Request → [Error recovery] → [Request logging] → [Secure headers] → [Sessions] → Route

    1. Error recovery: Starlette's ServerErrorMiddleware turns unhandled
       exceptions into a 500 response (always outermost)
    2. Request logging: one structured record per request (logging.py)
    3. Secure headers: browser security headers on every response
    4. Sessions: signed cookie session for flash messages and the user id
"""
