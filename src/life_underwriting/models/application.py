# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Insurance application models consumed by the underwriting engine.

Applications arrive fully populated from intake. Structural problems
(unknown enum values, wrong types) are rejected here by pydantic; numeric
business preconditions such as positive income are checked by the engine at
evaluation time so they surface as ``InvalidInput`` results.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from beartype import beartype
from pydantic import Field, field_validator

from .base import BaseModelConfig, normalize_code


class Gender(str, Enum):
    """Applicant gender as recorded on the application."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class AlcoholConsumption(str, Enum):
    """Self-reported alcohol consumption level."""

    NONE = "NONE"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    HEAVY = "HEAVY"


class ExerciseFrequency(str, Enum):
    """Self-reported exercise frequency."""

    NEVER = "NEVER"
    OCCASIONAL = "OCCASIONAL"
    REGULAR = "REGULAR"
    FREQUENT = "FREQUENT"


def _upper_enum_input(value: Any) -> Any:
    if isinstance(value, str):
        return normalize_code(value)
    return value


@beartype
class ApplicantInfo(BaseModelConfig):
    """Identity, occupation and residence of the proposed insured."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date | None = Field(default=None)
    gender: Gender = Field(default=Gender.OTHER)
    occupation: str = Field(
        ..., min_length=1, max_length=100, description="Free-text occupation"
    )
    residence_state: str = Field(
        ...,
        min_length=2,
        max_length=2,
        description="Two-letter state of residence",
    )

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> Any:
        """Accept gender codes case-insensitively."""
        return _upper_enum_input(v)

    @field_validator("residence_state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        """Store state codes upper-cased."""
        if not v.isalpha():
            raise ValueError(f"Invalid state code: {v}")
        return v.upper()


@beartype
class MedicalCondition(BaseModelConfig):
    """A single entry of the applicant's medical history."""

    condition_type: str = Field(..., min_length=1, max_length=100)
    severity: str | None = Field(default=None, max_length=50)
    diagnosis_date: date | None = Field(default=None)
    treatment: str | None = Field(default=None, max_length=200)
    years_in_remission: int = Field(default=0, ge=0, le=150)

    @field_validator("condition_type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Normalise condition type for table lookup."""
        return normalize_code(v)

    @field_validator("severity")
    @classmethod
    def normalize_severity(cls, v: str | None) -> str | None:
        """Normalise severity for table lookup; blank means unspecified."""
        if v is None or not v.strip():
            return None
        return normalize_code(v)


@beartype
class FamilyHistoryEntry(BaseModelConfig):
    """A condition diagnosed in a blood relative."""

    relationship: str = Field(..., min_length=1, max_length=50)
    condition: str = Field(..., min_length=1, max_length=100)
    age_at_diagnosis: int = Field(..., ge=0, le=150)

    @field_validator("relationship", "condition")
    @classmethod
    def normalize_codes(cls, v: str) -> str:
        """Normalise relationship and condition for table lookup."""
        return normalize_code(v)


@beartype
class LifestyleProfile(BaseModelConfig):
    """Lifestyle answers from the application questionnaire."""

    alcohol_consumption: AlcoholConsumption = Field(default=AlcoholConsumption.NONE)
    exercise_frequency: ExerciseFrequency = Field(
        default=ExerciseFrequency.OCCASIONAL
    )
    hazardous_activities: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("alcohol_consumption", "exercise_frequency", mode="before")
    @classmethod
    def normalize_levels(cls, v: Any) -> Any:
        """Accept level codes case-insensitively."""
        return _upper_enum_input(v)

    @field_validator("hazardous_activities")
    @classmethod
    def normalize_activities(cls, v: frozenset[str]) -> frozenset[str]:
        """Normalise activity names and drop blanks."""
        return frozenset(normalize_code(a) for a in v if a.strip())


@beartype
class MedicalProfile(BaseModelConfig):
    """Medical and lifestyle information used for medical underwriting."""

    age: int = Field(..., ge=0, description="Age in whole years")
    height_inches: int = Field(..., gt=0, description="Height in inches")
    weight_pounds: int = Field(..., gt=0, description="Weight in pounds")
    is_smoker: bool = Field(default=False)
    medical_history: tuple[MedicalCondition, ...] = Field(default=())
    family_history: tuple[FamilyHistoryEntry, ...] = Field(default=())
    lifestyle: LifestyleProfile = Field(default_factory=LifestyleProfile)


@beartype
class FinancialProfile(BaseModelConfig):
    """Income, assets and obligations used for financial underwriting."""

    annual_income: Decimal = Field(..., description="Gross annual income")
    net_worth: Decimal = Field(..., description="Total net worth")
    liquid_assets: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    total_debt: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    monthly_expenses: Decimal = Field(..., description="Monthly living expenses")
    credit_score: int = Field(..., description="Bureau score, normally 300-850")


@beartype
class InsuranceApplication(BaseModelConfig):
    """A complete life-insurance application as delivered by intake."""

    application_id: str = Field(..., min_length=1, max_length=64)
    applicant: ApplicantInfo
    medical: MedicalProfile
    financial: FinancialProfile
    requested_coverage: Decimal = Field(..., description="Face amount requested")
    product_type: str = Field(default="TERM_LIFE", min_length=1, max_length=50)

    @field_validator("product_type")
    @classmethod
    def normalize_product_type(cls, v: str) -> str:
        """Store product types as upper snake case."""
        return normalize_code(v)
