"""Underwriting policy engine - core business logic for loan decisions"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Sequence, Tuple

from underwriting_gateway.domain.calculations import compute_metrics
from underwriting_gateway.domain.models import (
    DecisionOutcome,
    LoanApplication,
    Metrics,
    Occupancy,
    PolicyRule,
    UnderwritingDecision,
)

POLICY_VERSION = "underwriting_v1"

APPROVED_REASON = "all underwriting criteria met"


@dataclass(frozen=True)
class PolicyThresholds:
    """
    Business parameters of the rule table.

    Maximums are inclusive (a value equal to the maximum passes) and minimums
    are inclusive (a score equal to the minimum passes).

    Threshold rationale:
    - credit_floor = 500: below this no program accepts the borrower
    - max_dti = 50%: hard ceiling on total monthly obligations
    - standard_dti = 43%: qualified-mortgage line, above it needs a human
    - LTV and score limits tighten as occupancy moves away from primary residence
    """

    credit_floor: int = 500
    max_dti: Decimal = Decimal("50")
    standard_dti: Decimal = Decimal("43")
    max_ltv: Dict[Occupancy, Decimal] = field(
        default_factory=lambda: {
            Occupancy.PRIMARY: Decimal("97"),
            Occupancy.SECONDARY: Decimal("85"),
            Occupancy.INVESTMENT: Decimal("75"),
        }
    )
    min_score: Dict[Occupancy, int] = field(
        default_factory=lambda: {
            Occupancy.PRIMARY: 620,
            Occupancy.SECONDARY: 660,
            Occupancy.INVESTMENT: 700,
        }
    )


def build_rule_table(thresholds: PolicyThresholds) -> Tuple[PolicyRule, ...]:
    """
    Build the ordered rule table from thresholds.

    Hard disqualifiers come first, then manual-review triggers. Keeping every
    `denied` rule ahead of every `refer` rule is what makes the outcome
    monotonic in each input, so tables violating that order are rejected.
    """
    t = thresholds
    rules = (
        PolicyRule(
            name="credit_floor",
            passes=lambda app, m: app.credit_score >= t.credit_floor,
            outcome=DecisionOutcome.DENIED,
            reason="credit score below minimum floor",
        ),
        PolicyRule(
            name="max_ltv",
            passes=lambda app, m: m.ltv <= t.max_ltv[app.occupancy],
            outcome=DecisionOutcome.DENIED,
            reason="loan-to-value exceeds maximum for occupancy type",
        ),
        PolicyRule(
            name="max_dti",
            passes=lambda app, m: m.dti <= t.max_dti,
            outcome=DecisionOutcome.DENIED,
            reason="debt-to-income ratio exceeds maximum",
        ),
        PolicyRule(
            name="standard_score",
            passes=lambda app, m: app.credit_score >= t.min_score[app.occupancy],
            outcome=DecisionOutcome.REFER,
            reason="credit score below standard threshold for occupancy type, manual review required",
        ),
        PolicyRule(
            name="standard_dti",
            passes=lambda app, m: m.dti <= t.standard_dti,
            outcome=DecisionOutcome.REFER,
            reason="debt-to-income ratio above standard threshold, manual review required",
        ),
    )
    check_rule_order(rules)
    return rules


def check_rule_order(rules: Sequence[PolicyRule]) -> None:
    """Raise ValueError unless rule outcomes run from most to least severe"""
    for rule in rules:
        if rule.outcome is DecisionOutcome.APPROVED:
            raise ValueError(f"Rule '{rule.name}' cannot fail into an approval")

    for previous, current in zip(rules, rules[1:]):
        if current.outcome.severity > previous.outcome.severity:
            raise ValueError(
                f"Rule '{current.name}' ({current.outcome.value}) must not follow "
                f"less severe rule '{previous.name}' ({previous.outcome.value})"
            )


DEFAULT_THRESHOLDS = PolicyThresholds()
DEFAULT_RULES = build_rule_table(DEFAULT_THRESHOLDS)


def decide(
    app: LoanApplication,
    metrics: Metrics,
    rules: Sequence[PolicyRule] = DEFAULT_RULES,
) -> Tuple[DecisionOutcome, str]:
    """
    Evaluate the rule table in order and stop at the first failing rule.

    Returns: (outcome, reason); (approved, APPROVED_REASON) when every rule passes
    """
    for rule in rules:
        if not rule.passes(app, metrics):
            return rule.outcome, rule.reason

    return DecisionOutcome.APPROVED, APPROVED_REASON


def make_underwriting_decision(
    app: LoanApplication,
    rules: Sequence[PolicyRule] = DEFAULT_RULES,
) -> UnderwritingDecision:
    """
    Main entry point: derive ratios and evaluate policy.

    Returns complete UnderwritingDecision with outcome, reason and metrics.
    """
    metrics = compute_metrics(app)
    outcome, reason = decide(app, metrics, rules)

    return UnderwritingDecision(
        outcome=outcome,
        reason=reason,
        metrics=metrics,
        policy_version=POLICY_VERSION,
    )
