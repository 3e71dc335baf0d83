"""
Snippetbox — Application Package
=================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │   Middleware (logging, headers)     │  ← every request
    ├─────────────────────────────────────┤
    │   Routes + Templates (HTML pages)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (snippets, users)        │  ← data access, business rules
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (async sessions)         │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
