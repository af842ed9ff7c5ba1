# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Assessment and result records produced by the underwriting engine.

Each record is built once per evaluation and passed forward unchanged.
:class:`UnderwritingResult` is the only record handed to downstream
consumers (reporting, compliance, analytics) and serialises with
``model_dump_json()``.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal, localcontext
from enum import Enum
from types import MappingProxyType

from beartype import beartype
from pydantic import ConfigDict, Field

from .base import BaseModelConfig

# Enough digits to keep products of sentinel factors exact
FACTOR_PRECISION = 50


class MedicalRiskClass(str, Enum):
    """Medical risk class derived from the accumulated medical risk score."""

    SUPER_PREFERRED = "SUPER_PREFERRED"
    PREFERRED = "PREFERRED"
    STANDARD = "STANDARD"
    SUBSTANDARD = "SUBSTANDARD"
    DECLINED = "DECLINED"


class RiskClass(str, Enum):
    """Overall risk class derived from the composite rating factor."""

    PREFERRED = "PREFERRED"
    STANDARD = "STANDARD"
    SUBSTANDARD = "SUBSTANDARD"
    DECLINED = "DECLINED"


class FinancialJustification(str, Enum):
    """Financial rationale bucket the requested coverage falls into."""

    INCOME_REPLACEMENT = "INCOME_REPLACEMENT"
    ESTATE_PLANNING = "ESTATE_PLANNING"
    BUSINESS_PROTECTION = "BUSINESS_PROTECTION"
    INSUFFICIENT_JUSTIFICATION = "INSUFFICIENT_JUSTIFICATION"


class FinancialStability(str, Enum):
    """Financial stability rating."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class UnderwritingDecision(str, Enum):
    """Terminal underwriting decisions."""

    APPROVE_AS_APPLIED = "APPROVE_AS_APPLIED"
    APPROVE_WITH_RATING = "APPROVE_WITH_RATING"
    DECLINE = "DECLINE"
    POSTPONE_PENDING_REQUIREMENTS = "POSTPONE_PENDING_REQUIREMENTS"


class RatingCategory(str, Enum):
    """Risk dimensions carrying a multiplicative rating factor."""

    MEDICAL = "MEDICAL"
    FINANCIAL = "FINANCIAL"
    OCCUPATION = "OCCUPATION"
    LIFESTYLE = "LIFESTYLE"
    GEOGRAPHIC = "GEOGRAPHIC"


@beartype
def compose_factors(factors: Mapping[str, Decimal] | Iterable[Decimal]) -> Decimal:
    """Multiply rating factors together.

    The product is computed exactly, so any iteration order gives the same
    value.
    """
    values = factors.values() if isinstance(factors, Mapping) else factors
    with localcontext() as ctx:
        ctx.prec = FACTOR_PRECISION
        return math.prod(values, start=Decimal("1"))


@beartype
class InvalidInput(BaseModelConfig):
    """Input rejected at the evaluation boundary; no partial result exists."""

    field: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    value: str | None = Field(default=None)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@beartype
class RiskFactor(BaseModelConfig):
    """One scored contribution to the medical risk score."""

    category: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=255)
    score: int = Field(..., description="Points added to the risk score")


@beartype
class MedicalAssessment(BaseModelConfig):
    """Outcome of medical underwriting."""

    risk_score: int = Field(..., ge=0)
    risk_class: MedicalRiskClass
    risk_factors: tuple[RiskFactor, ...] = Field(default=())
    bmi: float = Field(..., gt=0)
    medical_exam_required: bool
    additional_requirements: tuple[str, ...] = Field(default=())


@beartype
class FinancialAssessment(BaseModelConfig):
    """Outcome of financial underwriting."""

    income_multiplier: Decimal = Field(..., gt=Decimal("0"))
    max_coverage_by_income: Decimal
    max_coverage_by_net_worth: Decimal
    max_recommended_coverage: Decimal
    financial_justification: FinancialJustification
    debt_to_income_ratio: Decimal = Field(..., ge=Decimal("0"))
    liquidity_ratio: Decimal = Field(..., ge=Decimal("0"))
    stability_score: int
    financial_stability: FinancialStability
    additional_documentation_required: bool


@beartype
class RatingFactorMap(BaseModelConfig):
    """Multiplicative rating factor per risk dimension.

    A factor of 999.99 is a sentinel for an effectively-declined dimension;
    it only ever feeds premium math and the audit trail. Serialised keys are
    the category names (``MEDICAL``, ``FINANCIAL``, ...).
    """

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )

    medical: Decimal = Field(
        ..., gt=Decimal("0"), alias=RatingCategory.MEDICAL.value
    )
    financial: Decimal = Field(
        ..., gt=Decimal("0"), alias=RatingCategory.FINANCIAL.value
    )
    occupation: Decimal = Field(
        default=Decimal("1.00"), gt=Decimal("0"), alias=RatingCategory.OCCUPATION.value
    )
    lifestyle: Decimal = Field(
        default=Decimal("1.00"), gt=Decimal("0"), alias=RatingCategory.LIFESTYLE.value
    )
    geographic: Decimal = Field(
        default=Decimal("1.00"), gt=Decimal("0"), alias=RatingCategory.GEOGRAPHIC.value
    )

    def as_mapping(self) -> Mapping[str, Decimal]:
        """Read-only category name -> factor view."""
        return MappingProxyType(
            {
                RatingCategory.MEDICAL.value: self.medical,
                RatingCategory.FINANCIAL.value: self.financial,
                RatingCategory.OCCUPATION.value: self.occupation,
                RatingCategory.LIFESTYLE.value: self.lifestyle,
                RatingCategory.GEOGRAPHIC.value: self.geographic,
            }
        )

    def composite(self) -> Decimal:
        """Product of all factors."""
        return compose_factors(self.as_mapping())


@beartype
class RiskAssessment(BaseModelConfig):
    """Combined risk picture across all rating dimensions."""

    risk_class: RiskClass
    rating_factors: RatingFactorMap
    overall_risk_score: Decimal = Field(..., gt=Decimal("0"))
    risk_notes: tuple[str, ...] = Field(default=())


@beartype
class DecisionOutcome(BaseModelConfig):
    """Decision selected by the precedence rules, with attached conditions."""

    decision: UnderwritingDecision
    conditions: tuple[str, ...] = Field(default=())
    rule: str = Field(..., min_length=1, description="Precedence rule that fired")


@beartype
class UnderwritingResult(BaseModelConfig):
    """Final underwriting output exposed to downstream consumers."""

    application_id: str = Field(..., min_length=1)
    decision: UnderwritingDecision
    decision_rule: str = Field(..., min_length=1)
    risk_class: RiskClass
    rating_factors: RatingFactorMap
    overall_risk_score: Decimal
    medical_assessment: MedicalAssessment
    financial_assessment: FinancialAssessment
    recommended_premium: Decimal = Field(..., ge=Decimal("0"))
    conditions: tuple[str, ...] = Field(default=())
    risk_notes: tuple[str, ...] = Field(default=())
    evaluator_id: str = Field(..., min_length=1)
    evaluated_at: datetime

    @property
    def is_declined(self) -> bool:
        """Whether the premium must stay off customer-facing paths."""
        return self.decision == UnderwritingDecision.DECLINE

    @property
    def additional_requirements(self) -> tuple[str, ...]:
        """Medical requirements gathered during medical underwriting."""
        return self.medical_assessment.additional_requirements
