"""Underwriting risk engine package.

This package converts an insurance application into an underwriting result:
- Medical risk scoring and medical risk classification
- Financial capacity evaluation and coverage justification
- Rating factor aggregation and overall risk classification
- Premium calculation with a minimum premium floor
- Ordered decision precedence rules
- Illustrative mortality rate lookup
"""

from .bands import Band, BandTable
from .decision_engine import DECISION_RULES, DecisionEngine, DecisionRule
from .engine import UnderwritingEngine
from .financial_evaluator import FinancialCapacityEvaluator
from .medical_scorer import MedicalRiskScorer, calculate_bmi
from .mortality import MortalityRateLookup
from .premium_calculator import PremiumCalculator
from .risk_aggregator import RiskAggregator

__all__ = [
    # Main Engine
    "UnderwritingEngine",
    # Components
    "MedicalRiskScorer",
    "FinancialCapacityEvaluator",
    "RiskAggregator",
    "PremiumCalculator",
    "DecisionEngine",
    "MortalityRateLookup",
    # Decision rules
    "DecisionRule",
    "DECISION_RULES",
    # Helpers
    "Band",
    "BandTable",
    "calculate_bmi",
]
