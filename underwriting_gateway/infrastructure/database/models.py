"""SQLAlchemy ORM models for the decision history"""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from underwriting_gateway.domain.validation import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS, NAME_MAX_LENGTH

Base = declarative_base()


class LoanRecordRow(Base):
    """One underwriting decision with the application that produced it"""

    __tablename__ = "loan_records"

    # Autoincrement id doubles as the append order for history reads
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Widths match the validation bounds; ratios reach 10^20 percent at the extremes
    borrower_name = Column(String(NAME_MAX_LENGTH), nullable=False)
    monthly_income = Column(Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES), nullable=False)
    monthly_debts = Column(Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES), nullable=False)
    loan_amount = Column(Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES), nullable=False)
    property_value = Column(Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES), nullable=False)
    credit_score = Column(Integer, nullable=False)
    occupancy = Column(String(50), nullable=False)
    decision = Column(String(10), nullable=False)
    dti = Column(Numeric(24, 2), nullable=False)
    ltv = Column(Numeric(24, 2), nullable=False)
    reason = Column(Text, nullable=False)
    policy_version = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
