"""
Domain Exceptions

Every failure raised by the reservation services carries a stable ``code``
and a human readable message. The HTTP layer maps the two families:

- NotFoundError: a referenced field, booking, product or order is absent
- ConflictError: the requested resource cannot be allocated right now
"""


class DomainError(Exception):
    """Base class for typed domain failures."""

    code = "DOMAIN_ERROR"
    default_message = "Domain error"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(DomainError):
    code = "CONFLICT"
    default_message = "Resource is not available"
