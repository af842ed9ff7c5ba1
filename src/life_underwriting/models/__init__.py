"""Domain models package for the life underwriting engine.

This package exports the frozen Pydantic records that flow through an
evaluation: the application submitted by intake, the intermediate medical,
financial and risk assessments, and the final underwriting result.
"""

from .application import (
    AlcoholConsumption,
    ApplicantInfo,
    ExerciseFrequency,
    FamilyHistoryEntry,
    FinancialProfile,
    Gender,
    InsuranceApplication,
    LifestyleProfile,
    MedicalCondition,
    MedicalProfile,
)
from .assessment import (
    DecisionOutcome,
    FinancialAssessment,
    FinancialJustification,
    FinancialStability,
    InvalidInput,
    MedicalAssessment,
    MedicalRiskClass,
    RatingCategory,
    RatingFactorMap,
    RiskAssessment,
    RiskClass,
    RiskFactor,
    UnderwritingDecision,
    UnderwritingResult,
    compose_factors,
)
from .base import BaseModelConfig

__all__ = [
    # Base models
    "BaseModelConfig",
    # Application models
    "AlcoholConsumption",
    "ApplicantInfo",
    "ExerciseFrequency",
    "FamilyHistoryEntry",
    "FinancialProfile",
    "Gender",
    "InsuranceApplication",
    "LifestyleProfile",
    "MedicalCondition",
    "MedicalProfile",
    # Assessment models
    "DecisionOutcome",
    "FinancialAssessment",
    "FinancialJustification",
    "FinancialStability",
    "InvalidInput",
    "MedicalAssessment",
    "MedicalRiskClass",
    "RatingCategory",
    "RatingFactorMap",
    "RiskAssessment",
    "RiskClass",
    "RiskFactor",
    "UnderwritingDecision",
    "UnderwritingResult",
    "compose_factors",
]
