# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id stored in a ContextVar and echoed back
    2. Logging: one access line per request, tagged with the request id
       and the note the request touched
"""
