# Middleware package init
"""
HRMS Backend — Middleware Package
==================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id.
"""
