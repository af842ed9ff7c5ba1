"""Final underwriting decision from ordered precedence rules.

Rules are evaluated top to bottom and the first match wins. The decline
rules must stay ahead of the rating and postponement rules: a declined
medical class always declines, whatever the other dimensions say.
"""

from collections.abc import Callable

from attrs import frozen
from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.assessment import (
    DecisionOutcome,
    FinancialAssessment,
    FinancialJustification,
    MedicalAssessment,
    MedicalRiskClass,
    RiskAssessment,
    RiskClass,
    UnderwritingDecision,
)

logger = get_logger(__name__)

POSTPONE_CONDITION = "Medical exam required before final decision"


@frozen
class DecisionRule:
    """A named predicate over the three assessments and its decision."""

    name: str
    applies: Callable[[MedicalAssessment, FinancialAssessment, RiskAssessment], bool]
    decision: UnderwritingDecision


DECISION_RULES: tuple[DecisionRule, ...] = (
    DecisionRule(
        "medical_declined",
        lambda m, f, r: m.risk_class == MedicalRiskClass.DECLINED,
        UnderwritingDecision.DECLINE,
    ),
    DecisionRule(
        "insufficient_financial_justification",
        lambda m, f, r: f.financial_justification
        == FinancialJustification.INSUFFICIENT_JUSTIFICATION,
        UnderwritingDecision.DECLINE,
    ),
    DecisionRule(
        "overall_risk_declined",
        lambda m, f, r: r.risk_class == RiskClass.DECLINED,
        UnderwritingDecision.DECLINE,
    ),
    DecisionRule(
        "medical_substandard",
        lambda m, f, r: m.risk_class == MedicalRiskClass.SUBSTANDARD,
        UnderwritingDecision.APPROVE_WITH_RATING,
    ),
    DecisionRule(
        "overall_risk_substandard",
        lambda m, f, r: r.risk_class == RiskClass.SUBSTANDARD,
        UnderwritingDecision.APPROVE_WITH_RATING,
    ),
    DecisionRule(
        "medical_exam_required",
        lambda m, f, r: m.medical_exam_required,
        UnderwritingDecision.POSTPONE_PENDING_REQUIREMENTS,
    ),
)

DEFAULT_RULE = DecisionRule(
    "standard_acceptance",
    lambda m, f, r: True,
    UnderwritingDecision.APPROVE_AS_APPLIED,
)


class DecisionEngine:
    """Select the underwriting decision and its conditions."""

    def __init__(self, rules: tuple[DecisionRule, ...] = DECISION_RULES) -> None:
        self._rules = rules

    @beartype
    def decide(
        self,
        medical: MedicalAssessment,
        financial: FinancialAssessment,
        risk: RiskAssessment,
    ) -> DecisionOutcome:
        """Apply the precedence rules and attach conditions.

        Args:
            medical: Medical assessment
            financial: Financial assessment
            risk: Overall risk assessment

        Returns:
            Decision outcome naming the rule that fired
        """
        rule = next(
            (r for r in self._rules if r.applies(medical, financial, risk)),
            DEFAULT_RULE,
        )
        logger.info("Decision %s via rule %s", rule.decision.value, rule.name)

        return DecisionOutcome(
            decision=rule.decision,
            conditions=self.conditions_for(rule.decision, risk),
            rule=rule.name,
        )

    @beartype
    def conditions_for(
        self, decision: UnderwritingDecision, risk: RiskAssessment
    ) -> tuple[str, ...]:
        """Conditions attached to a decision."""
        if decision == UnderwritingDecision.APPROVE_WITH_RATING:
            rating = f"{risk.overall_risk_score.normalize():f}"
            return (f"Policy issued with {rating}x rating",)
        if decision == UnderwritingDecision.POSTPONE_PENDING_REQUIREMENTS:
            return (POSTPONE_CONDITION,)
        return ()
