# Routes package init
"""
Notes API — Routes Package
============================

Route Inventory:
    - notes.py:   GET/POST      /api/notes
                  GET/PUT/DELETE /api/notes/{id}
    - health.py:  GET /health

Routes handle HTTP concerns only (path ids, status codes, headers) and
delegate everything else to NoteService.
"""
