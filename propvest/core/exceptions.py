# propvest/core/exceptions.py
"""Domain errors shared by the storage backends and the route layer.

Every error carries the HTTP status it maps to; ``propvest.core.handlers``
turns them into ``{"message": ...}`` JSON responses.
"""


class PropvestError(Exception):
    status_code = 500
    default_message = "Something went wrong on our end. Please try again."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PropvestError):
    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(PropvestError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(PropvestError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(PropvestError):
    status_code = 404
    default_message = "Not found"


class BusinessRuleViolation(PropvestError):
    status_code = 400
    default_message = "Operation not allowed"


class InsufficientBalance(BusinessRuleViolation):
    default_message = "Insufficient wallet balance"


class InsufficientFunds(InsufficientBalance):
    default_message = "Insufficient funds"


class PropertyNotAvailable(BusinessRuleViolation):
    default_message = "Property is not available for investment"


class InternalInconsistency(PropvestError):
    """Stored state references something that no longer exists."""

    status_code = 500
