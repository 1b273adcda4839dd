# Middleware package init
"""
Song Manager Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can read the correlation id
    2. Logging: captures status and duration on the way back out
"""
