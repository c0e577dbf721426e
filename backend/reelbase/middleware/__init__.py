# Middleware package init
"""
Reelbase Backend — Middleware Package
=======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate or accept a correlation ID
    2. Logging: Log request details with that ID
    3. GZip / CORS: Applied by FastAPI's built-in middleware

    The order is reversed for responses, so the request ID is written to the
    response headers and the logger sees the final status and duration.
"""
