"""Combine medical, financial and applicant dimensions into a risk assessment."""

from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.application import (
    AlcoholConsumption,
    ExerciseFrequency,
    InsuranceApplication,
    LifestyleProfile,
)
from ...models.assessment import (
    FinancialAssessment,
    MedicalAssessment,
    RatingFactorMap,
    RiskAssessment,
    RiskClass,
)
from ...models.base import normalize_code
from . import rate_tables as tables

logger = get_logger(__name__)


class RiskAggregator:
    """Build the rating factor map and overall risk class for an application.

    Each of the five factors comes from a disjoint input dimension, and the
    overall risk score is their product.
    """

    @beartype
    def aggregate(
        self,
        application: InsuranceApplication,
        medical: MedicalAssessment,
        financial: FinancialAssessment,
    ) -> RiskAssessment:
        """Aggregate assessments into the overall risk picture.

        Args:
            application: The application under evaluation
            medical: Medical assessment for the same application
            financial: Financial assessment for the same application

        Returns:
            Immutable risk assessment with rating factors and risk class
        """
        rating_factors = RatingFactorMap(
            medical=tables.MEDICAL_FACTORS[medical.risk_class],
            financial=tables.FINANCIAL_FACTORS[financial.financial_justification],
            occupation=self.occupation_factor(application.applicant.occupation),
            lifestyle=self.lifestyle_factor(application.medical.lifestyle),
            geographic=self.geographic_factor(application.applicant.residence_state),
        )

        overall_score = rating_factors.composite()
        risk_class: RiskClass = tables.OVERALL_RISK_CLASSES.lookup(overall_score)

        logger.debug(
            "Overall risk score %s (%s) from factors %s",
            overall_score,
            risk_class.value,
            dict(rating_factors.as_mapping()),
        )

        return RiskAssessment(
            risk_class=risk_class,
            rating_factors=rating_factors,
            overall_risk_score=overall_score,
            risk_notes=self.risk_notes(medical, financial),
        )

    @beartype
    def occupation_factor(self, occupation: str) -> Decimal:
        """Occupation hazard factor; unknown occupations rate as 1.00."""
        return tables.OCCUPATION_FACTORS.get(
            normalize_code(occupation), tables.DEFAULT_OCCUPATION_FACTOR
        )

    @beartype
    def lifestyle_factor(self, lifestyle: LifestyleProfile) -> Decimal:
        """Compound the independent lifestyle adjustments."""
        factor = Decimal("1.00")
        if lifestyle.alcohol_consumption == AlcoholConsumption.HEAVY:
            factor *= tables.HEAVY_ALCOHOL_FACTOR
        if lifestyle.hazardous_activities:
            factor *= tables.HAZARDOUS_ACTIVITY_FACTOR
        if lifestyle.exercise_frequency == ExerciseFrequency.REGULAR:
            factor *= tables.REGULAR_EXERCISE_FACTOR
        return factor

    @beartype
    def geographic_factor(self, residence_state: str) -> Decimal:
        """Geographic factor by state of residence."""
        return tables.GEOGRAPHIC_FACTORS.get(
            residence_state.upper(), tables.DEFAULT_GEOGRAPHIC_FACTOR
        )

    @beartype
    def risk_notes(
        self, medical: MedicalAssessment, financial: FinancialAssessment
    ) -> tuple[str, ...]:
        """Advisory notes for the underwriter; not used by the decision rules."""
        notes: list[str] = []
        if medical.risk_score > tables.ELEVATED_MEDICAL_SCORE:
            notes.append("Elevated medical risk due to health conditions")
        if financial.debt_to_income_ratio > tables.HIGH_DEBT_TO_INCOME:
            notes.append("High debt-to-income ratio may affect financial stability")
        if financial.additional_documentation_required:
            notes.append(
                "Additional financial documentation required for requested coverage amount"
            )
        return tuple(notes)
