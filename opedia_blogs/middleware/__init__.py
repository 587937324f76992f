# Middleware package init
"""
Opedia Blogs API — Middleware Package
=======================================

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Rate Limit] → Route Handler

    1. CORS outermost: every response, a 429 included, carries the
       allow-origin headers a browser needs to read it
    2. Request ID: correlation ID for logging and every error body
    3. Logging: one access-log line per request, tagged with the request ID
    4. Rate Limit: rejects over-quota clients before any route runs

The order is reversed for responses.
"""
