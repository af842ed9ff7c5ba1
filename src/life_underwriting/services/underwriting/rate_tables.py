# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Static underwriting rate tables.

All tables are built once at import time and exposed read-only
(``MappingProxyType`` / frozen ``BandTable``), so concurrent evaluations can
share them without coordination.
"""

from decimal import Decimal
from types import MappingProxyType

from attrs import frozen

from ...models.application import AlcoholConsumption, ExerciseFrequency, Gender
from ...models.assessment import (
    FinancialJustification,
    FinancialStability,
    MedicalRiskClass,
    RiskClass,
)
from .bands import Band, BandTable

# "Never pass" multiplier for declined dimensions. Decisions are taken on the
# underlying classification, not on this value.
DECLINED_SENTINEL_FACTOR = Decimal("999.99")


@frozen
class ScoreEntry:
    """Risk points with the description recorded on the risk factor."""

    score: int
    description: str


# =============================================================================
# MEDICAL
# =============================================================================

SMOKER_SCORE = ScoreEntry(50, "Current smoker")

AGE_SCORES: BandTable[ScoreEntry] = BandTable.below(
    [
        (25, ScoreEntry(5, "Young adult")),
        (35, ScoreEntry(0, "Young adult - preferred")),
        (45, ScoreEntry(10, "Middle age - standard")),
        (55, ScoreEntry(20, "Middle age - increased risk")),
        (65, ScoreEntry(35, "Senior - higher risk")),
    ],
    default=ScoreEntry(50, "Senior - high risk"),
)

BMI_SCORES: BandTable[ScoreEntry] = BandTable.below(
    [
        (18.5, ScoreEntry(15, "Underweight")),
        (25.0, ScoreEntry(0, "Normal weight")),
        (30.0, ScoreEntry(10, "Overweight")),
        (35.0, ScoreEntry(25, "Obese Class I")),
        (40.0, ScoreEntry(40, "Obese Class II")),
    ],
    default=ScoreEntry(60, "Obese Class III"),
)

INCHES_TO_METERS = 0.0254
POUNDS_TO_KILOGRAMS = 0.453592


@frozen
class ConditionRule:
    """Scoring rule for one medical condition type.

    Severity-keyed rows take priority; conditions scored by remission use the
    remission band table instead.
    """

    default: ScoreEntry
    by_severity: MappingProxyType = MappingProxyType({})
    by_remission_years: BandTable[ScoreEntry] | None = None

    def score(self, severity: str | None, years_in_remission: int) -> ScoreEntry:
        """Resolve the score entry for a recorded condition."""
        if self.by_remission_years is not None:
            return self.by_remission_years.lookup(years_in_remission)
        if severity is not None and severity in self.by_severity:
            return self.by_severity[severity]
        return self.default


CONDITION_RULES: MappingProxyType = MappingProxyType(
    {
        "DIABETES": ConditionRule(
            default=ScoreEntry(50, "Diabetes"),
            by_severity=MappingProxyType(
                {
                    "CONTROLLED": ScoreEntry(30, "Controlled diabetes"),
                    "UNCONTROLLED": ScoreEntry(80, "Uncontrolled diabetes"),
                }
            ),
        ),
        "HYPERTENSION": ConditionRule(
            default=ScoreEntry(25, "Hypertension"),
            by_severity=MappingProxyType(
                {
                    "MILD": ScoreEntry(15, "Mild hypertension"),
                    "MODERATE": ScoreEntry(30, "Moderate hypertension"),
                    "SEVERE": ScoreEntry(60, "Severe hypertension"),
                }
            ),
        ),
        "HEART_DISEASE": ConditionRule(default=ScoreEntry(100, "Heart disease")),
        "CANCER": ConditionRule(
            default=ScoreEntry(25, "Remote cancer history"),
            by_remission_years=BandTable.at_most(
                [
                    (2, ScoreEntry(150, "Recent cancer history")),
                    (5, ScoreEntry(75, "Cancer history")),
                ],
                default=ScoreEntry(25, "Remote cancer history"),
            ),
        ),
    }
)

UNKNOWN_CONDITION = ScoreEntry(20, "Other medical condition")

FAMILY_HISTORY_BASE_SCORES: MappingProxyType = MappingProxyType(
    {
        "HEART_DISEASE": 15,
        "CANCER": 10,
        "DIABETES": 8,
        "STROKE": 12,
    }
)
FAMILY_HISTORY_DEFAULT_SCORE = 5

RELATIONSHIP_MULTIPLIERS: MappingProxyType = MappingProxyType(
    {
        "PARENT": Decimal("1.0"),
        "SIBLING": Decimal("0.8"),
        "GRANDPARENT": Decimal("0.5"),
    }
)
RELATIONSHIP_DEFAULT_MULTIPLIER = Decimal("0.3")

EARLY_ONSET_AGE = 60
EARLY_ONSET_MULTIPLIER = Decimal("1.5")

ALCOHOL_SCORES: MappingProxyType = MappingProxyType(
    {
        AlcoholConsumption.HEAVY: ScoreEntry(25, "heavy drinking"),
        AlcoholConsumption.MODERATE: ScoreEntry(5, "moderate drinking"),
    }
)

EXERCISE_SCORES: MappingProxyType = MappingProxyType(
    {
        ExerciseFrequency.NEVER: ScoreEntry(15, "sedentary lifestyle"),
        ExerciseFrequency.REGULAR: ScoreEntry(-5, "regular exercise"),
    }
)

HAZARDOUS_ACTIVITY_SCORES: MappingProxyType = MappingProxyType(
    {
        "SKYDIVING": ScoreEntry(30, "skydiving"),
        "ROCK_CLIMBING": ScoreEntry(20, "rock climbing"),
        "MOTORCYCLE_RACING": ScoreEntry(40, "motorcycle racing"),
        "SCUBA_DIVING": ScoreEntry(15, "scuba diving"),
    }
)

# Inclusive upper bounds on the accumulated medical risk score
MEDICAL_RISK_CLASSES: BandTable[MedicalRiskClass] = BandTable.at_most(
    [
        (10, MedicalRiskClass.SUPER_PREFERRED),
        (25, MedicalRiskClass.PREFERRED),
        (50, MedicalRiskClass.STANDARD),
        (100, MedicalRiskClass.SUBSTANDARD),
    ],
    default=MedicalRiskClass.DECLINED,
)

MEDICAL_EXAM_SCORE_THRESHOLD = 50
MEDICAL_EXAM_AGE_THRESHOLD = 50
PHYSICIAN_STATEMENT_SCORE_THRESHOLD = 75
COGNITIVE_ASSESSMENT_AGE_THRESHOLD = 65

PHYSICIAN_REQUIREMENTS = ("Physician's statement", "Medical records")
CARDIAC_REQUIREMENTS = ("Cardiac stress test", "EKG")
DIABETIC_REQUIREMENTS = ("HbA1c test", "Diabetic panel")
COGNITIVE_REQUIREMENTS = ("Cognitive assessment",)

# =============================================================================
# FINANCIAL
# =============================================================================

INCOME_MULTIPLIERS: BandTable[Decimal] = BandTable.below(
    [
        (Decimal("50000"), Decimal("10")),
        (Decimal("100000"), Decimal("15")),
        (Decimal("250000"), Decimal("20")),
        (Decimal("500000"), Decimal("25")),
    ],
    default=Decimal("30"),
)

NET_WORTH_MULTIPLIER = Decimal("0.25")
RATIO_QUANTUM = Decimal("0.0001")

DEBT_TO_INCOME_POINTS: BandTable[int] = BandTable.below(
    [
        (Decimal("0.20"), 20),
        (Decimal("0.36"), 10),
        (Decimal("0.50"), 0),
    ],
    default=-10,
)

# >1.0 -> 15, >0.5 -> 10, >0.25 -> 5, otherwise -5
LIQUIDITY_POINTS: BandTable[int] = BandTable.at_most(
    [
        (Decimal("0.25"), -5),
        (Decimal("0.5"), 5),
        (Decimal("1.0"), 10),
    ],
    default=15,
)

# >=800 -> 15, >=740 -> 10, >=670 -> 5, >=580 -> 0, otherwise -10
CREDIT_SCORE_POINTS: BandTable[int] = BandTable.below(
    [
        (580, -10),
        (670, 0),
        (740, 5),
        (800, 10),
    ],
    default=15,
)

FINANCIAL_STABILITY_CLASSES: BandTable[FinancialStability] = BandTable.below(
    [
        (0, FinancialStability.POOR),
        (15, FinancialStability.FAIR),
        (30, FinancialStability.GOOD),
    ],
    default=FinancialStability.EXCELLENT,
)

# =============================================================================
# RATING FACTORS
# =============================================================================

MEDICAL_FACTORS: MappingProxyType = MappingProxyType(
    {
        MedicalRiskClass.SUPER_PREFERRED: Decimal("0.85"),
        MedicalRiskClass.PREFERRED: Decimal("0.95"),
        MedicalRiskClass.STANDARD: Decimal("1.00"),
        MedicalRiskClass.SUBSTANDARD: Decimal("1.25"),
        MedicalRiskClass.DECLINED: DECLINED_SENTINEL_FACTOR,
    }
)

FINANCIAL_FACTORS: MappingProxyType = MappingProxyType(
    {
        FinancialJustification.INCOME_REPLACEMENT: Decimal("1.00"),
        FinancialJustification.ESTATE_PLANNING: Decimal("1.05"),
        FinancialJustification.BUSINESS_PROTECTION: Decimal("1.10"),
        FinancialJustification.INSUFFICIENT_JUSTIFICATION: DECLINED_SENTINEL_FACTOR,
    }
)

OCCUPATION_FACTORS: MappingProxyType = MappingProxyType(
    {
        # Office and professional
        "TEACHER": Decimal("1.00"),
        "ACCOUNTANT": Decimal("1.00"),
        "ENGINEER": Decimal("1.00"),
        "LAWYER": Decimal("1.00"),
        # Public safety
        "POLICE_OFFICER": Decimal("1.25"),
        "FIREFIGHTER": Decimal("1.25"),
        # Elevated exposure
        "PILOT": Decimal("1.50"),
        "CONSTRUCTION_WORKER": Decimal("1.50"),
        # High-hazard trades
        "MINER": Decimal("2.00"),
        "LOGGER": Decimal("2.00"),
        "COMMERCIAL_FISHERMAN": Decimal("2.00"),
    }
)
DEFAULT_OCCUPATION_FACTOR = Decimal("1.00")

HEAVY_ALCOHOL_FACTOR = Decimal("1.15")
HAZARDOUS_ACTIVITY_FACTOR = Decimal("1.10")
REGULAR_EXERCISE_FACTOR = Decimal("0.95")

GEOGRAPHIC_FACTORS: MappingProxyType = MappingProxyType(
    {
        # Higher cost states
        "CA": Decimal("1.05"),
        "FL": Decimal("1.05"),
        "TX": Decimal("1.05"),
        # High cost, high risk
        "NY": Decimal("1.10"),
        "NJ": Decimal("1.10"),
        "CT": Decimal("1.10"),
        # Lower risk states
        "WY": Decimal("0.95"),
        "MT": Decimal("0.95"),
        "ND": Decimal("0.95"),
    }
)
DEFAULT_GEOGRAPHIC_FACTOR = Decimal("1.00")

# <0.90 preferred; <=1.10 standard; <=2.00 substandard
OVERALL_RISK_CLASSES: BandTable[RiskClass] = BandTable(
    (
        Band(Decimal("0.90"), RiskClass.PREFERRED),
        Band(Decimal("1.10"), RiskClass.STANDARD, inclusive=True),
        Band(Decimal("2.00"), RiskClass.SUBSTANDARD, inclusive=True),
    ),
    default=RiskClass.DECLINED,
)

ELEVATED_MEDICAL_SCORE = 50
HIGH_DEBT_TO_INCOME = Decimal("0.40")

# =============================================================================
# MORTALITY (illustrative only)
# =============================================================================

BASE_MORTALITY_RATES: BandTable[Decimal] = BandTable.below(
    [
        (30, Decimal("0.0008")),
        (40, Decimal("0.0012")),
        (50, Decimal("0.0020")),
        (60, Decimal("0.0035")),
        (70, Decimal("0.0065")),
    ],
    default=Decimal("0.0120"),
)

GENDER_MORTALITY_FACTORS: MappingProxyType = MappingProxyType(
    {
        Gender.FEMALE: Decimal("0.85"),
    }
)
DEFAULT_GENDER_MORTALITY_FACTOR = Decimal("1.00")

RISK_CLASS_MORTALITY_FACTORS: MappingProxyType = MappingProxyType(
    {
        RiskClass.PREFERRED: Decimal("0.80"),
        RiskClass.STANDARD: Decimal("1.00"),
        RiskClass.SUBSTANDARD: Decimal("1.50"),
        RiskClass.DECLINED: DECLINED_SENTINEL_FACTOR,
    }
)
