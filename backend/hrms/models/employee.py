"""
HRMS Backend — Employee Document Mapping
=========================================

What:  Translates between API schemas and documents in the `employees` collection.
Why:   Keeps BSON field names and ObjectId handling out of the service logic.

Document Shape:
    {
        "_id":    ObjectId,   # assigned by MongoDB on insert, never rewritten
        "name":   str,
        "salary": float,
        "age":    float
    }

    No indexes beyond `_id`. Fields absent from a stored document decode to
    their zero values, matching how request bodies are decoded.
"""

from typing import Any, Dict, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError as PydanticValidationError

from hrms.exceptions import DocumentDecodeError, InvalidIdentifierError
from hrms.schemas.employee import EmployeeIn, EmployeeResponse

ID_FIELD = "_id"
NAME_FIELD = "name"
SALARY_FIELD = "salary"
AGE_FIELD = "age"


def parse_object_id(raw_id: str, public: bool = True) -> ObjectId:
    """
    Parse the URL form of an identifier into an ObjectId.

    Raises:
        InvalidIdentifierError: `raw_id` is not 24 hex characters.
    """
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(raw_id=raw_id, message=str(e), public=public) from e


def id_filter(employee_id: ObjectId) -> Dict[str, Any]:
    return {ID_FIELD: employee_id}


def to_document(employee: EmployeeIn) -> Dict[str, Any]:
    """Build the insert document. `_id` is left out so MongoDB assigns one."""
    return {
        NAME_FIELD: employee.name,
        SALARY_FIELD: employee.salary,
        AGE_FIELD: employee.age,
    }


def to_update(employee: EmployeeIn) -> Dict[str, Any]:
    """`$set` of the mutable fields only; the identifier is never touched."""
    return {
        "$set": {
            NAME_FIELD: employee.name,
            AGE_FIELD: employee.age,
            SALARY_FIELD: employee.salary,
        }
    }


def from_document(document: Mapping[str, Any]) -> EmployeeResponse:
    """
    Decode a stored document into an EmployeeResponse.

    Raises:
        DocumentDecodeError: a field holds a value of the wrong type.
    """
    raw_id = document.get(ID_FIELD)
    document_id = str(raw_id) if raw_id is not None else None
    try:
        return EmployeeResponse.model_validate(
            {
                "id": document_id,
                "name": document.get(NAME_FIELD, ""),
                "salary": document.get(SALARY_FIELD, 0.0),
                "age": document.get(AGE_FIELD, 0.0),
            }
        )
    except PydanticValidationError as e:
        raise DocumentDecodeError(
            message=f"error decoding employee document {document_id}: {e}",
            document_id=document_id,
        ) from e
