# Services package init
"""
Notes API — Services Layer
============================

What:  Business logic between routes (HTTP) and the database.
How:   Services take the request's AsyncSession and return response schemas.
       They're reached from routes through app.dependencies.

Service Inventory:
    - NoteService: list, get, create (with owner), delete, update
"""
