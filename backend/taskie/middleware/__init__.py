"""
Taskie Backend - Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every error envelope
    carry the same correlation ID. Responses unwind in reverse order.
"""
