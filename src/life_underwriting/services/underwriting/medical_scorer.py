"""Medical underwriting: risk score, medical risk class and requirements."""

from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.application import (
    FamilyHistoryEntry,
    LifestyleProfile,
    MedicalCondition,
    MedicalProfile,
)
from ...models.assessment import MedicalAssessment, MedicalRiskClass, RiskFactor
from . import rate_tables as tables

logger = get_logger(__name__)


@beartype
def calculate_bmi(height_inches: int, weight_pounds: int) -> float:
    """Body-mass index from imperial intake measurements."""
    height_meters = height_inches * tables.INCHES_TO_METERS
    weight_kg = weight_pounds * tables.POUNDS_TO_KILOGRAMS
    return weight_kg / (height_meters**2)


class MedicalRiskScorer:
    """Convert a medical profile into a medical assessment.

    The risk score is the sum of independent contributions (age, smoking,
    BMI, each medical condition, each family-history entry, lifestyle).
    Every contribution is recorded as a :class:`RiskFactor` so the score can
    be audited. Scoring is total: every branch has a default row.
    """

    @beartype
    def score(self, profile: MedicalProfile) -> MedicalAssessment:
        """Score a medical profile.

        Args:
            profile: Medical profile with age, measurements, history and lifestyle

        Returns:
            Immutable medical assessment
        """
        risk_factors: list[RiskFactor] = []

        age_entry = tables.AGE_SCORES.lookup(profile.age)
        risk_factors.append(
            RiskFactor(
                category="AGE", description=age_entry.description, score=age_entry.score
            )
        )

        if profile.is_smoker:
            risk_factors.append(
                RiskFactor(
                    category="SMOKING",
                    description=tables.SMOKER_SCORE.description,
                    score=tables.SMOKER_SCORE.score,
                )
            )

        bmi = calculate_bmi(profile.height_inches, profile.weight_pounds)
        bmi_entry = tables.BMI_SCORES.lookup(bmi)
        risk_factors.append(
            RiskFactor(
                category="BMI",
                description=f"{bmi_entry.description} (BMI {bmi:.1f})",
                score=bmi_entry.score,
            )
        )

        for condition in profile.medical_history:
            risk_factors.append(self.score_condition(condition))

        for entry in profile.family_history:
            risk_factors.append(self.score_family_history(entry))

        risk_factors.append(self.score_lifestyle(profile.lifestyle))

        risk_score = sum(factor.score for factor in risk_factors)
        risk_class: MedicalRiskClass = tables.MEDICAL_RISK_CLASSES.lookup(risk_score)

        logger.debug(
            "Medical risk score %d (%s) from %d factors",
            risk_score,
            risk_class.value,
            len(risk_factors),
        )

        return MedicalAssessment(
            risk_score=risk_score,
            risk_class=risk_class,
            risk_factors=tuple(risk_factors),
            bmi=bmi,
            medical_exam_required=self.requires_medical_exam(profile, risk_score),
            additional_requirements=self.additional_requirements(profile, risk_score),
        )

    @beartype
    def score_condition(self, condition: MedicalCondition) -> RiskFactor:
        """Score one medical-history condition from the condition table."""
        rule = tables.CONDITION_RULES.get(condition.condition_type)
        if rule is None:
            entry = tables.UNKNOWN_CONDITION
        else:
            entry = rule.score(condition.severity, condition.years_in_remission)
        return RiskFactor(
            category="MEDICAL_HISTORY", description=entry.description, score=entry.score
        )

    @beartype
    def score_family_history(self, entry: FamilyHistoryEntry) -> RiskFactor:
        """Score a relative's diagnosis: base score x relationship x early onset."""
        base_score = tables.FAMILY_HISTORY_BASE_SCORES.get(
            entry.condition, tables.FAMILY_HISTORY_DEFAULT_SCORE
        )
        relationship_multiplier = tables.RELATIONSHIP_MULTIPLIERS.get(
            entry.relationship, tables.RELATIONSHIP_DEFAULT_MULTIPLIER
        )
        onset_multiplier = (
            tables.EARLY_ONSET_MULTIPLIER
            if entry.age_at_diagnosis < tables.EARLY_ONSET_AGE
            else Decimal("1")
        )

        # Truncated toward zero
        adjusted = int(Decimal(base_score) * relationship_multiplier * onset_multiplier)

        return RiskFactor(
            category="FAMILY_HISTORY",
            description=f"Family history of {entry.condition}",
            score=adjusted,
        )

    @beartype
    def score_lifestyle(self, lifestyle: LifestyleProfile) -> RiskFactor:
        """Score lifestyle answers; the sub-score is floored at zero."""
        score = 0
        notes: list[str] = []

        alcohol = tables.ALCOHOL_SCORES.get(lifestyle.alcohol_consumption)
        if alcohol is not None:
            score += alcohol.score
            notes.append(alcohol.description)

        exercise = tables.EXERCISE_SCORES.get(lifestyle.exercise_frequency)
        if exercise is not None:
            score += exercise.score
            notes.append(exercise.description)

        for activity in sorted(lifestyle.hazardous_activities):
            hazard = tables.HAZARDOUS_ACTIVITY_SCORES.get(activity)
            if hazard is not None:
                score += hazard.score
                notes.append(hazard.description)

        description = (
            f"Lifestyle factors: {', '.join(notes)}" if notes else "Standard lifestyle"
        )
        return RiskFactor(category="LIFESTYLE", description=description, score=max(0, score))

    @beartype
    def requires_medical_exam(self, profile: MedicalProfile, risk_score: int) -> bool:
        """Exam needed for elevated scores, older applicants or any history."""
        return (
            risk_score > tables.MEDICAL_EXAM_SCORE_THRESHOLD
            or profile.age > tables.MEDICAL_EXAM_AGE_THRESHOLD
            or len(profile.medical_history) > 0
        )

    @beartype
    def additional_requirements(
        self, profile: MedicalProfile, risk_score: int
    ) -> tuple[str, ...]:
        """Collect the documentation requirements triggered by the profile."""
        requirements: list[str] = []
        condition_types = {c.condition_type for c in profile.medical_history}

        if risk_score > tables.PHYSICIAN_STATEMENT_SCORE_THRESHOLD:
            requirements.extend(tables.PHYSICIAN_REQUIREMENTS)
        if "HEART_DISEASE" in condition_types:
            requirements.extend(tables.CARDIAC_REQUIREMENTS)
        if "DIABETES" in condition_types:
            requirements.extend(tables.DIABETIC_REQUIREMENTS)
        if profile.age > tables.COGNITIVE_ASSESSMENT_AGE_THRESHOLD:
            requirements.extend(tables.COGNITIVE_REQUIREMENTS)

        return tuple(requirements)
