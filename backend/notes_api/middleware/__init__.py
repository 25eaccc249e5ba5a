# Middleware package init
"""
Notes API - Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS first: OPTIONS requests are answered with 204 before anything else
    2. Request ID: correlation ID for logs and the X-Request-ID header
    3. Logging: method, path, status and duration, tagged with the request ID
"""
