"""Pydantic schemas for API responses"""

from pydantic import BaseModel
from typing import List, Optional

from underwriting_gateway.domain.models import DecisionRecord


class DecisionResponse(BaseModel):
    """Response for POST /api/request-loan"""

    decision: str
    dti: float
    ltv: float
    reason: str

    @classmethod
    def from_record(cls, record: DecisionRecord) -> "DecisionResponse":
        return cls(
            decision=record.outcome.value,
            dti=float(record.metrics.dti),
            ltv=float(record.metrics.ltv),
            reason=record.reason,
        )


class FieldErrorSchema(BaseModel):
    """One invalid field in a rejected application"""

    field: str
    problem: str


class ValidationErrorDetail(BaseModel):
    """Error payload for a rejected application"""

    message: str
    errors: List[FieldErrorSchema]


class HistoryItem(BaseModel):
    """Single decision in history"""

    id: Optional[int] = None
    name: str
    monthly_income: float
    monthly_debts: float
    loan_amount: float
    property_value: float
    credit_score: int
    occupancy: str
    decision: str
    dti: float
    ltv: float
    reason: str
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: DecisionRecord) -> "HistoryItem":
        app = record.application
        return cls(
            id=record.id,
            name=app.name,
            monthly_income=float(app.monthly_income),
            monthly_debts=float(app.monthly_debts),
            loan_amount=float(app.loan_amount),
            property_value=float(app.property_value),
            credit_score=app.credit_score,
            occupancy=app.occupancy.value,
            decision=record.outcome.value,
            dti=float(record.metrics.dti),
            ltv=float(record.metrics.ltv),
            reason=record.reason,
            created_at=record.created_at.isoformat() if record.created_at else None,
        )
