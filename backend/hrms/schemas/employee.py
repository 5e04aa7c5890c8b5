"""
HRMS Backend — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the employee API contract.
How:   Request bodies are decoded by the service layer with
       `EmployeeIn.model_validate_json()`, so malformed JSON is reported as a
       400 with the parser's own text rather than FastAPI's automatic 422.

Design Decision:
    Schemas are separate from the BSON document mapping (hrms.models.employee):
    the API exposes `id` as hex text, the store keeps `_id` as an ObjectId.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeIn(BaseModel):
    """
    What:  Body accepted by POST /employee and PUT /employee/{id}.

    Missing fields decode to their zero values. `id` is accepted so that
    clients can send back a record they received, but it is never persisted:
    create drops it, update takes the id from the path.

    Numbers are strict: JSON integers and floats only, no numeric strings,
    and no NaN/Infinity (including literals that overflow, like 1e400).
    """
    id: Optional[str] = Field(default=None, description="Ignored on write")
    name: str = Field(default="", description="Employee name (not checked for emptiness)")
    salary: float = Field(default=0.0, strict=True, allow_inf_nan=False, description="Salary")
    age: float = Field(default=0.0, strict=True, allow_inf_nan=False, description="Age")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    What:  An employee record as returned to clients.
    Who:   Returned by list (array), create (re-fetched) and update (echoed).

    `id` is omitted from the JSON when empty; routes serialize with
    `response_model_exclude_none=True`.
    """
    id: Optional[str] = Field(default=None, description="Store-assigned identifier (24 hex chars)")
    name: str = Field(description="Employee name")
    salary: float = Field(description="Salary")
    age: float = Field(description="Age")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
