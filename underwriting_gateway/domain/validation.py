"""Loan application validation - rejects malformed input before any computation"""

from decimal import MAX_EMAX, MIN_EMIN, Context, Decimal, localcontext
from typing import Annotated, Any, List

from pydantic import BaseModel, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError

from underwriting_gateway.domain.exceptions import FieldError, ValidationError
from underwriting_gateway.domain.models import LoanApplication, Occupancy

MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850

# Amounts fit the history columns: up to 14 integer digits and 4 decimals
AMOUNT_MAX_DIGITS = 18
AMOUNT_DECIMAL_PLACES = 4
NAME_MAX_LENGTH = 100

Amount = Annotated[
    Decimal,
    Field(allow_inf_nan=False, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES),
]


class LoanApplicationRequest(BaseModel):
    """Raw application fields as submitted by the caller"""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)]
    monthly_income: Amount = Field(gt=0)
    monthly_debts: Amount = Field(ge=0)
    loan_amount: Amount = Field(gt=0)
    property_value: Amount = Field(gt=0)
    credit_score: int = Field(ge=MIN_CREDIT_SCORE, le=MAX_CREDIT_SCORE)
    occupancy: Occupancy

    @field_validator("monthly_income", "monthly_debts", "loan_amount", "property_value", "credit_score", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("occupancy", mode="before")
    @classmethod
    def normalize_occupancy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def _field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "body"
        errors.append(FieldError(field, err["msg"]))
    return errors


def validate(raw: Any) -> LoanApplication:
    """
    Normalize a raw request payload into a LoanApplication.

    Every field is checked and all violations are raised together in a single
    ValidationError, so the caller can fix the whole form in one round trip.

    Raises:
        ValidationError: one or more fields are missing or invalid
    """
    # Full exponent range so inputs like "1e999999999" reach the digit limits
    # instead of overflowing the default context
    with localcontext(Context(Emax=MAX_EMAX, Emin=MIN_EMIN)):
        try:
            request = LoanApplicationRequest.model_validate(raw)
        except PydanticValidationError as e:
            raise ValidationError(_field_errors(e)) from e

    return LoanApplication(**request.model_dump())
