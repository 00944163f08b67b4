"""Data access layer for decision records"""

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from underwriting_gateway.domain.exceptions import StoreError
from underwriting_gateway.domain.models import (
    DecisionOutcome,
    DecisionRecord,
    LoanApplication,
    Metrics,
    Occupancy,
)
from underwriting_gateway.infrastructure.database.models import LoanRecordRow


def _to_domain(row: LoanRecordRow) -> DecisionRecord:
    return DecisionRecord(
        application=LoanApplication(
            name=row.borrower_name,
            monthly_income=row.monthly_income,
            monthly_debts=row.monthly_debts,
            loan_amount=row.loan_amount,
            property_value=row.property_value,
            credit_score=row.credit_score,
            occupancy=Occupancy(row.occupancy),
        ),
        metrics=Metrics(dti=row.dti, ltv=row.ltv),
        outcome=DecisionOutcome(row.decision),
        reason=row.reason,
        policy_version=row.policy_version,
        id=row.id,
        created_at=row.created_at,
    )


class DecisionRepository:
    """Append-only SQL store for decision records"""

    def __init__(self, db: Session):
        self.db = db

    def append(self, record: DecisionRecord) -> DecisionRecord:
        """Persist one record in its own transaction"""
        app = record.application
        row = LoanRecordRow(
            borrower_name=app.name,
            monthly_income=app.monthly_income,
            monthly_debts=app.monthly_debts,
            loan_amount=app.loan_amount,
            property_value=app.property_value,
            credit_score=app.credit_score,
            occupancy=app.occupancy.value,
            decision=record.outcome.value,
            dti=record.metrics.dti,
            ltv=record.metrics.ltv,
            reason=record.reason,
            policy_version=record.policy_version,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("append", str(e)) from e

        return _to_domain(row)

    def list(self) -> List[DecisionRecord]:
        """Fetch all records in insertion order"""
        try:
            rows = self.db.query(LoanRecordRow).order_by(LoanRecordRow.id.asc()).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("list", str(e)) from e

        return [_to_domain(row) for row in rows]
