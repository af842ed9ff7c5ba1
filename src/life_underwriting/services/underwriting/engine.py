# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.
"""Underwriting engine that orchestrates a complete evaluation.

Medical scoring and financial evaluation run independently on the same
application; their outputs feed risk aggregation, which in turn feeds the
premium calculation and the decision rules. The engine holds no mutable
state, so one instance can serve concurrent evaluations.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from beartype import beartype
from pydantic import ValidationError

from ...core.config import UnderwritingSettings, get_settings
from ...core.logging_utils import get_logger
from ...core.performance_monitor import performance_monitor
from ...core.result_types import Err, Ok, Result
from ...models.application import InsuranceApplication
from ...models.assessment import InvalidInput, UnderwritingResult
from .decision_engine import DecisionEngine
from .financial_evaluator import FinancialCapacityEvaluator
from .medical_scorer import MedicalRiskScorer
from .mortality import MortalityRateLookup
from .premium_calculator import PremiumCalculator
from .risk_aggregator import RiskAggregator

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UnderwritingEngine:
    """Evaluate insurance applications into underwriting results."""

    def __init__(
        self,
        settings: UnderwritingSettings | None = None,
        *,
        clock: Callable[[], datetime] = _utc_now,
        medical_scorer: MedicalRiskScorer | None = None,
        financial_evaluator: FinancialCapacityEvaluator | None = None,
        risk_aggregator: RiskAggregator | None = None,
        premium_calculator: PremiumCalculator | None = None,
        decision_engine: DecisionEngine | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Engine settings; the cached settings are used when omitted
            clock: Source of the evaluation timestamp (timezone-aware)
            medical_scorer: Medical scoring component
            financial_evaluator: Financial evaluation component
            risk_aggregator: Risk aggregation component
            premium_calculator: Premium calculation component
            decision_engine: Decision precedence component
        """
        self._settings = settings or get_settings()
        self._clock = clock
        self._medical_scorer = medical_scorer or MedicalRiskScorer()
        self._financial_evaluator = financial_evaluator or FinancialCapacityEvaluator()
        self._risk_aggregator = risk_aggregator or RiskAggregator()
        self._premium_calculator = premium_calculator or PremiumCalculator(
            self._settings
        )
        self._decision_engine = decision_engine or DecisionEngine()
        self._mortality = MortalityRateLookup()
        self._timed_evaluate = performance_monitor(
            "underwriting_evaluate",
            max_duration_ms=self._settings.slow_evaluation_ms,
        )(self._evaluate_application)

    @beartype
    def evaluate(
        self, application: InsuranceApplication, *, evaluator_id: str
    ) -> Result[UnderwritingResult, InvalidInput]:
        """Evaluate an application.

        Args:
            application: Fully populated application from intake
            evaluator_id: Identifier of the underwriter or session requesting
                the evaluation

        Returns:
            Result containing the underwriting result, or InvalidInput when the
            application fails entry validation
        """
        return self._timed_evaluate(application, evaluator_id)

    def _evaluate_application(
        self, application: InsuranceApplication, evaluator_id: str
    ) -> Result[UnderwritingResult, InvalidInput]:
        invalid = self.validate(application, evaluator_id)
        if invalid is not None:
            logger.warning(
                "Application %s rejected: %s", application.application_id, invalid
            )
            return Err(invalid)

        financial_result = self._financial_evaluator.evaluate(
            application.financial, application.requested_coverage
        )
        if financial_result.is_err():
            logger.warning(
                "Application %s rejected: %s",
                application.application_id,
                financial_result.unwrap_err(),
            )
            return financial_result
        financial = financial_result.unwrap()

        medical = self._medical_scorer.score(application.medical)
        risk = self._risk_aggregator.aggregate(application, medical, financial)
        premium = self._premium_calculator.calculate(
            application.requested_coverage, risk.rating_factors.as_mapping()
        )
        outcome = self._decision_engine.decide(medical, financial, risk)

        result = UnderwritingResult(
            application_id=application.application_id,
            decision=outcome.decision,
            decision_rule=outcome.rule,
            risk_class=risk.risk_class,
            rating_factors=risk.rating_factors,
            overall_risk_score=risk.overall_risk_score,
            medical_assessment=medical,
            financial_assessment=financial,
            recommended_premium=premium,
            conditions=outcome.conditions,
            risk_notes=risk.risk_notes,
            evaluator_id=evaluator_id,
            evaluated_at=self._clock(),
        )

        logger.info(
            "Application %s evaluated by %s: %s (%s)",
            application.application_id,
            evaluator_id,
            result.decision.value,
            result.risk_class.value,
        )
        return Ok(result)

    @beartype
    def evaluate_payload(
        self, payload: Mapping[str, Any], *, evaluator_id: str
    ) -> Result[UnderwritingResult, InvalidInput]:
        """Validate raw intake data and evaluate it.

        Malformed payloads (unknown enum values, wrong types, missing fields)
        become ``InvalidInput`` instead of raising.
        """
        try:
            application = InsuranceApplication.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            invalid = InvalidInput(
                field=".".join(str(part) for part in first["loc"]) or "application",
                message=first["msg"],
                value=None if first.get("input") is None else str(first["input"]),
            )
            logger.warning("Application payload rejected: %s", invalid)
            return Err(invalid)

        return self.evaluate(application, evaluator_id=evaluator_id)

    @beartype
    def validate(
        self, application: InsuranceApplication, evaluator_id: str
    ) -> InvalidInput | None:
        """Check entry preconditions; return the first violation found.

        Age, height and weight bounds are enforced by ``MedicalProfile``
        itself, so a constructed application always scores.
        """
        checks: tuple[tuple[bool, str, str, Any], ...] = (
            (
                not evaluator_id.strip(),
                "evaluator_id",
                "Evaluator id is required",
                evaluator_id,
            ),
            (
                application.requested_coverage <= 0,
                "requested_coverage",
                "Requested coverage must be positive",
                application.requested_coverage,
            ),
        )
        for failed, field, message, value in checks:
            if failed:
                return InvalidInput(field=field, message=message, value=str(value))
        return None

    @beartype
    def mortality_rate(
        self, application: InsuranceApplication, result: UnderwritingResult
    ) -> Decimal:
        """Illustrative annual mortality rate for an evaluated application."""
        return self._mortality.lookup(
            application.medical.age, application.applicant.gender, result.risk_class
        )
