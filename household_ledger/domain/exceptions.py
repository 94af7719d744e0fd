"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    category = "domain_error"


class ValidationError(DomainException):
    """Input is malformed or out of range; raised before any store call"""

    category = "validation"


class InvalidStateError(ValidationError):
    """Requested transition is not allowed from the record's current status"""

    category = "invalid_state"


class NotFoundError(DomainException):
    """Mutation targets an identifier that does not exist"""

    category = "not_found"


class StoreUnavailableError(DomainException):
    """Backing store call failed for a transport or availability reason"""

    category = "store_unavailable"


class SummaryServiceError(DomainException):
    """Text-summary service returned an error or is unreachable"""

    category = "summary_unavailable"
