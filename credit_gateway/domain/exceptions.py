"""Domain-specific exceptions"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure classes callers branch on"""

    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    BUSINESS_RULE = "business_rule"


class DomainException(Exception):
    """Base exception for domain layer"""

    kind: ErrorKind = ErrorKind.BUSINESS_RULE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(DomainException, LookupError):
    """Referenced customer, loan or installment does not exist"""

    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(DomainException, ValueError):
    """Caller-supplied value violates a precondition"""

    kind = ErrorKind.INVALID_ARGUMENT


class CreditError(DomainException):
    """Well-formed request that lending rules do not allow"""

    kind = ErrorKind.BUSINESS_RULE
