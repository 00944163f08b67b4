"""Domain models - pure Python dataclasses representing underwriting entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional


class Occupancy(str, Enum):
    """Declared use of the financed property"""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    INVESTMENT = "investment"


class DecisionOutcome(str, Enum):
    """Underwriting outcome, ordered approved < refer < denied"""

    APPROVED = "approved"
    REFER = "refer"
    DENIED = "denied"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    DecisionOutcome.APPROVED: 0,
    DecisionOutcome.REFER: 1,
    DecisionOutcome.DENIED: 2,
}


@dataclass(frozen=True)
class LoanApplication:
    """Validated applicant and loan figures"""

    name: str
    monthly_income: Decimal
    monthly_debts: Decimal
    loan_amount: Decimal
    property_value: Decimal
    credit_score: int
    occupancy: Occupancy


@dataclass(frozen=True)
class Metrics:
    """Derived ratios, as percentages rounded to 2 decimals"""

    dti: Decimal
    ltv: Decimal


@dataclass(frozen=True)
class PolicyRule:
    """
    One row of the policy table.

    `passes` returns True when the application satisfies the rule; the first
    rule that does not pass decides the outcome.
    """

    name: str
    passes: Callable[[LoanApplication, Metrics], bool]
    outcome: DecisionOutcome
    reason: str


@dataclass(frozen=True)
class UnderwritingDecision:
    """Output of a full policy evaluation"""

    outcome: DecisionOutcome
    reason: str
    metrics: Metrics
    policy_version: str


@dataclass(frozen=True)
class DecisionRecord:
    """Immutable history entry; id and created_at are assigned by the store"""

    application: LoanApplication
    metrics: Metrics
    outcome: DecisionOutcome
    reason: str
    policy_version: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
