"""Domain-specific exceptions"""

from dataclasses import dataclass
from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


@dataclass(frozen=True)
class FieldError:
    """A single invalid field in a loan application"""

    field: str
    problem: str


class ValidationError(DomainException):
    """Loan application is malformed or out of domain"""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(f"Invalid loan application: {fields}")


class ComputationError(DomainException):
    """Ratio or policy evaluation produced an impossible result"""

    pass


class StoreError(DomainException):
    """History store rejected a write or could not be read"""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"History store {operation} failed: {message}")
