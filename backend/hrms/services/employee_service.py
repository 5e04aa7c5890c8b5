"""
HRMS Backend — Employee Service (Business Logic)
=================================================

What:  List, create, update and delete employee records in MongoDB.
Why:   Keeps id parsing, body decoding and error classification out of the
       route handlers, and lets them be tested against a mocked collection.
How:   Each method performs one collection operation (create adds a
       confirmatory re-fetch) and either returns schema objects or raises an
       HRMSError subclass that main.py renders.
Who:   Constructed once per process around the shared collection handle;
       resolved by routes through `get_employee_service`.

Error Classification:
    ┌──────────────────┬──────────────────────┬──────────────────────────┐
    │ Operation        │ Failure              │ Raised as                │
    ├──────────────────┼──────────────────────┼──────────────────────────┤
    │ list             │ query / cursor error │ DatabaseError (text)     │
    │                  │ bad stored document  │ DocumentDecodeError      │
    │ create           │ bad body             │ ValidationError (text)   │
    │                  │ insert / re-fetch    │ DatabaseError (text)     │
    │ update           │ bad id               │ InvalidIdentifierError   │
    │                  │                      │   (no body)              │
    │                  │ bad body             │ ValidationError (text)   │
    │                  │ no match             │ NotFoundError, 400       │
    │                  │ store error          │ DatabaseError (no body)  │
    │ delete           │ bad id               │ InvalidIdentifierError   │
    │                  │ no match             │ NotFoundError, 404       │
    │                  │ store error          │ DatabaseError (no body)  │
    └──────────────────┴──────────────────────┴──────────────────────────┘

Every store call is awaited inside the request task, so cancelling the
request cancels the in-flight operation.
"""

import logging
from typing import List

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from hrms.exceptions import DatabaseError, NotFoundError, ValidationError
from hrms.models.employee import (
    from_document,
    id_filter,
    parse_object_id,
    to_document,
    to_update,
)
from hrms.schemas.employee import EmployeeIn, EmployeeResponse

logger = logging.getLogger(__name__)


def parse_employee_body(raw_body: bytes) -> EmployeeIn:
    """
    Decode a JSON request body into an EmployeeIn.

    Raises:
        ValidationError: the body is not JSON or a field has the wrong type.
            The message is pydantic's error text.
    """
    try:
        return EmployeeIn.model_validate_json(raw_body)
    except PydanticValidationError as e:
        raise ValidationError(message=str(e), field="body") from e


class EmployeeService:
    """
    Business logic for employee records.

    Holds no per-request state; the collection handle is injected at
    construction and never reassigned.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self._collection

    async def list_employees(self) -> List[EmployeeResponse]:
        """
        Return every employee in the collection, in natural order.

        An empty collection yields an empty list. A single undecodable
        document fails the whole call with DocumentDecodeError.
        """
        try:
            documents = await self._collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list employees: %s", str(e))
            raise DatabaseError(
                message=str(e),
                context={"operation": "find", "error_type": type(e).__name__},
            ) from e

        return [from_document(document) for document in documents]

    async def create_employee(self, raw_body: bytes) -> EmployeeResponse:
        """
        Insert a new employee and return it as stored.

        Workflow:
            1. Decode the body (any client `id` is dropped here)
            2. insert_one; MongoDB assigns `_id`
            3. find_one by the inserted id and decode the stored document

        The response is built from step 3, not from the request body, so it
        reflects exactly what was persisted.
        """
        employee = parse_employee_body(raw_body)

        try:
            result = await self._collection.insert_one(to_document(employee))
        except PyMongoError as e:
            logger.error("Failed to insert employee: %s", str(e))
            raise DatabaseError(
                message=str(e),
                context={"operation": "insert_one", "error_type": type(e).__name__},
            ) from e

        inserted_id = result.inserted_id
        logger.info("Employee created: %s", inserted_id)

        try:
            stored = await self._collection.find_one(id_filter(inserted_id))
        except PyMongoError as e:
            logger.error("Failed to read back employee %s: %s", inserted_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"operation": "find_one", "employee_id": str(inserted_id)},
            ) from e

        if stored is None:
            raise DatabaseError(
                message=f"employee {inserted_id} was inserted but could not be read back",
                context={"operation": "find_one", "employee_id": str(inserted_id)},
            )

        return from_document(stored)

    async def update_employee(self, raw_id: str, raw_body: bytes) -> EmployeeResponse:
        """
        Overwrite name, salary and age of the employee with id `raw_id`.

        The id is validated before the body. The response echoes the submitted
        values with `id` set to `raw_id`; the store is not re-read.

        Raises:
            InvalidIdentifierError: malformed id (400, empty body)
            ValidationError:        malformed body (400, parse error text)
            NotFoundError:          no document with this id (400, empty body)
            DatabaseError:          any other store failure (500, empty body)
        """
        employee_id = parse_object_id(raw_id, public=False)
        employee = parse_employee_body(raw_body)

        try:
            updated = await self._collection.find_one_and_update(
                id_filter(employee_id),
                to_update(employee),
            )
        except PyMongoError as e:
            logger.error("Failed to update employee %s: %s", raw_id, str(e))
            raise DatabaseError(
                message=str(e),
                public=False,
                context={"operation": "find_one_and_update", "employee_id": raw_id},
            ) from e

        if updated is None:
            raise NotFoundError(resource="employee", resource_id=raw_id, status_code=400)

        logger.info("Employee updated: %s", raw_id)
        return EmployeeResponse(
            id=raw_id,
            name=employee.name,
            salary=employee.salary,
            age=employee.age,
        )

    async def delete_employee(self, raw_id: str) -> None:
        """
        Delete the employee with id `raw_id`.

        Raises:
            InvalidIdentifierError: malformed id (400, bson error text)
            NotFoundError:          nothing deleted (404)
            DatabaseError:          store failure (500, empty body)
        """
        employee_id = parse_object_id(raw_id)

        try:
            result = await self._collection.delete_one(id_filter(employee_id))
        except PyMongoError as e:
            logger.error("Failed to delete employee %s: %s", raw_id, str(e))
            raise DatabaseError(
                message=str(e),
                public=False,
                context={"operation": "delete_one", "employee_id": raw_id},
            ) from e

        if result.deleted_count < 1:
            raise NotFoundError(resource="employee", resource_id=raw_id)

        logger.info("Employee deleted: %s", raw_id)


# ── Dependency ────────────────────────────────────────────────────────────
def get_employee_service(request: Request) -> EmployeeService:
    """FastAPI dependency returning the service attached to the app at startup."""
    return request.app.state.employee_service
