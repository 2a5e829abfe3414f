"""
Burger Boots Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status code.
Who:   Raised by services and the record/media stores; caught by global handlers.

Exception Hierarchy:
    BurgerBootsError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   ├── MissingRequiredFieldError
    │   ├── InvalidCategoryError
    │   └── InvalidPaginationError
    ├── NotFoundError                → 404 Not Found
    ├── UnsupportedMediaTypeError    → 415 Unsupported Media Type
    ├── PayloadTooLargeError         → 413 Payload Too Large
    ├── InternalError                → 500 Internal Server Error
    │   ├── StorageWriteError
    │   └── DatabaseError
    └── ServiceUnavailableError      → 503 Service Unavailable

`payload()` returns the extra keys a subclass contributes to the error body
(field errors, the valid category set, an empty listing). `context` is for
server-side logs only and is never sent to clients.
"""

from typing import Any, Dict, List, Optional, Sequence


class BurgerBootsError(Exception):
    """
    Base exception for all Burger Boots application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def payload(self) -> Dict[str, Any]:
        return {}


class ValidationError(BurgerBootsError):
    """
    Raised when client input fails validation.

    `errors` holds every violated field as {"field": ..., "message": ...},
    not just the first one, so a form can highlight all problems at once.

    Example response:
        {
            "error": "validation_error",
            "message": "Product validation failed",
            "errors": [{"field": "price", "message": "Price cannot be negative"}]
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []
        if field and not self.errors:
            self.errors = [{"field": field, "message": message}]

    def payload(self) -> Dict[str, Any]:
        return {"errors": self.errors} if self.errors else {}


class MissingRequiredFieldError(ValidationError):
    """Raised before any store access when a create request lacks required fields."""

    error_code = "missing_required_field"

    def __init__(self, missing: Sequence[str], context: Optional[Dict[str, Any]] = None):
        self.missing = list(missing)
        names = ", ".join(self.missing)
        super().__init__(
            message=f"Missing required fields: {names}",
            errors=[{"field": name, "message": f"{name} is required"} for name in self.missing],
            context=context,
        )

    def payload(self) -> Dict[str, Any]:
        body = super().payload()
        body["missingFields"] = self.missing
        return body


class InvalidCategoryError(ValidationError):
    """Raised when a blog category is not in the configured category set."""

    error_code = "invalid_category"

    def __init__(
        self,
        category: str,
        valid_categories: Sequence[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.category = category
        self.valid_categories = list(valid_categories)
        super().__init__(
            message=f"'{category}' is not a valid category",
            field="category",
            context=context,
        )

    def payload(self) -> Dict[str, Any]:
        body = super().payload()
        body["validCategories"] = self.valid_categories
        return body


class InvalidPaginationError(ValidationError):
    """
    Raised when page or limit is below 1.

    The response also carries an empty listing (`{<collection>: [], pagination}`)
    so list views can render it without a separate error branch.
    """

    error_code = "invalid_pagination"

    def __init__(
        self,
        message: str,
        collection: str = "items",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.collection = collection
        super().__init__(message=message, context=context)

    def payload(self) -> Dict[str, Any]:
        return {
            self.collection: [],
            "pagination": {
                "currentPage": 1,
                "totalPages": 0,
                "totalItems": 0,
                "hasNext": False,
                "hasPrev": False,
            },
        }


class NotFoundError(BurgerBootsError):
    """
    Raised when a requested resource does not exist.

    Malformed identifiers are reported the same way as unknown ones.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UnsupportedMediaTypeError(BurgerBootsError):
    """Raised when an upload's extension is not on the image allow-list."""

    status_code = 415
    error_code = "unsupported_media_type"

    def __init__(
        self,
        extension: str,
        allowed: Sequence[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.allowed = sorted(allowed)
        shown = extension or "(none)"
        super().__init__(
            message=(
                f"File type '{shown}' is not supported. "
                f"Only images are allowed ({', '.join(self.allowed)})."
            ),
            context=context,
        )

    def payload(self) -> Dict[str, Any]:
        return {"allowedTypes": self.allowed}


class PayloadTooLargeError(BurgerBootsError):
    """Raised when an upload exceeds the configured size ceiling."""

    status_code = 413
    error_code = "payload_too_large"

    def __init__(self, max_size: int, context: Optional[Dict[str, Any]] = None):
        self.max_size = max_size
        max_mb = max_size / (1024 * 1024)
        super().__init__(
            message=f"File size exceeds maximum of {max_mb:g}MB. Please upload a smaller image.",
            context=context,
        )

    def payload(self) -> Dict[str, Any]:
        return {"maxSize": self.max_size}


class InternalError(BurgerBootsError):
    """
    Unexpected failure the client cannot fix.

    The message returned to the client is always generic; details go to
    `context` and the server log only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageWriteError(InternalError):
    """Raised when an uploaded file could not be written completely."""

    def __init__(
        self,
        message: str = "Failed to save uploaded image. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InternalError):
    """Raised when a database operation fails unexpectedly."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceUnavailableError(BurgerBootsError):
    """Raised when the database cannot be reached or times out."""

    status_code = 503
    error_code = "service_unavailable"

    def __init__(
        self,
        message: str = "The database is temporarily unavailable. Please try again shortly.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
