"""
HRMS Backend — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for every failure a handler can report.
How:   Each exception carries an HTTP status, a message and a `public` flag.
       The handler registered in main.py turns any HRMSError into a response:
       `public=True` sends the message as a plain-text body, `public=False`
       sends the bare status with an empty body.
Who:   Raised by the service layer and database module; caught by main.py.

Exception Hierarchy:
    HRMSError (base)
    ├── ValidationError            → 400 Bad Request
    │   └── InvalidIdentifierError → 400 Bad Request
    ├── NotFoundError              → 404 Not Found (update passes status_code=400)
    ├── DatabaseError              → 500 Internal Server Error
    │   └── DocumentDecodeError    → 500 Internal Server Error
    └── DatabaseConnectionError    → fatal at startup, never rendered

Error bodies mirror the underlying error text (pydantic parse errors, bson id
errors, pymongo errors). There are no structured error codes.
"""

from typing import Any, Dict, Optional


class HRMSError(Exception):
    """
    Base exception for all HRMS application errors.

    Attributes:
        message:     Error text; becomes the response body when `public` is set
        status_code: HTTP status the exception handler responds with
        public:      Whether `message` is sent to the client
        context:     Additional debug info (logged, never returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: Optional[int] = None,
        public: bool = True,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.public = public
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HRMSError):
    """
    Raised when client input cannot be decoded.

    When:    Malformed JSON, wrong field types in the employee body.
    HTTP:    400 Bad Request, body is the parse error text.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        public: bool = True,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, public=public, context=ctx)
        self.field = field


class InvalidIdentifierError(ValidationError):
    """
    Raised when a path id is not a 24-character hex ObjectId.

    Always raised before any store call. PUT reports it with an empty body,
    DELETE with the bson error text, so the caller picks `public`.
    """

    def __init__(self, raw_id: str, message: str, public: bool = True):
        super().__init__(
            message=message,
            field="id",
            public=public,
            context={"raw_id": raw_id},
        )
        self.raw_id = raw_id


class NotFoundError(HRMSError):
    """
    Raised when an id-scoped write matched no document.

    HTTP:    404 for delete. Update raises it with status_code=400 to keep the
             established PUT contract, where an unmatched id is a client error.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message,
            status_code=status_code,
            public=False,
            context=ctx,
        )


class DatabaseError(HRMSError):
    """
    Raised when a MongoDB operation fails.

    When:    Server unreachable, cursor error, write error.
    HTTP:    500. List and create send the driver's error text; update and
             delete send an empty body.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        public: bool = True,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, public=public, context=context)


class DocumentDecodeError(DatabaseError):
    """
    Raised when a stored document does not fit the employee record shape.

    A single bad document fails the whole response; no partial result is sent.
    """

    def __init__(self, message: str, document_id: Optional[str] = None):
        ctx: Dict[str, Any] = {}
        if document_id:
            ctx["document_id"] = document_id
        super().__init__(message=message, context=ctx)


class DatabaseConnectionError(HRMSError):
    """
    Raised when the MongoDB session cannot be established at startup.

    Never rendered as a response: the lifespan re-raises it and uvicorn aborts.
    """

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message=message, context={"uri": uri} if uri else None)
