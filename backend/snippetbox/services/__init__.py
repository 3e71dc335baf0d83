"""
Snippetbox — Services Layer
============================

What:  Data-access and business rules between routes (HTTP) and the database.

Service Inventory:
    - SnippetService: insert, get and list snippets
    - UserService: signup, authentication and account lookup
    - passwords: salted password hashing used by UserService

Services take the request's AsyncSession as an argument and keep no state,
so a single module-level instance of each is shared by all requests.
"""
