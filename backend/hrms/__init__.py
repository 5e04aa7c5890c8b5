"""
HRMS Backend — Application Package Initializer
===============================================

What: Marks the `hrms` directory as a Python package.
Who:  Used by uvicorn (`uvicorn hrms.main:app`), pytest and the `hrms` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, raw request bodies
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← id/body parsing, store calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← BSON documents + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← one motor client, one collection
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
