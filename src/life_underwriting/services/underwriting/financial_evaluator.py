"""Financial underwriting: justified coverage, ratios and stability."""

from decimal import ROUND_HALF_UP, Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.application import FinancialProfile
from ...models.assessment import (
    FinancialAssessment,
    FinancialJustification,
    FinancialStability,
    InvalidInput,
)
from . import rate_tables as tables

logger = get_logger(__name__)


class FinancialCapacityEvaluator:
    """Evaluate whether the applicant's finances justify the requested coverage."""

    @beartype
    def evaluate(
        self, profile: FinancialProfile, requested_coverage: Decimal
    ) -> Result[FinancialAssessment, InvalidInput]:
        """Evaluate financial capacity for a requested face amount.

        Args:
            profile: Income, assets, debt and credit information
            requested_coverage: Face amount applied for

        Returns:
            Result containing the financial assessment, or InvalidInput when
            income or monthly expenses are not positive
        """
        if profile.annual_income <= 0:
            return Err(
                InvalidInput(
                    field="financial.annual_income",
                    message="Annual income must be positive",
                    value=str(profile.annual_income),
                )
            )
        if profile.monthly_expenses <= 0:
            return Err(
                InvalidInput(
                    field="financial.monthly_expenses",
                    message="Monthly expenses must be positive",
                    value=str(profile.monthly_expenses),
                )
            )

        income_multiplier: Decimal = tables.INCOME_MULTIPLIERS.lookup(
            profile.annual_income
        )
        max_by_income = profile.annual_income * income_multiplier
        max_by_net_worth = profile.net_worth * tables.NET_WORTH_MULTIPLIER
        max_recommended = max(max_by_income, max_by_net_worth)

        justification = self.classify_justification(
            requested_coverage, max_by_income, max_by_net_worth, max_recommended
        )

        debt_to_income = (profile.total_debt / profile.annual_income).quantize(
            tables.RATIO_QUANTUM, rounding=ROUND_HALF_UP
        )
        liquidity = (
            profile.liquid_assets / (profile.monthly_expenses * Decimal("12"))
        ).quantize(tables.RATIO_QUANTUM, rounding=ROUND_HALF_UP)

        stability_score = self.stability_score(
            debt_to_income, liquidity, profile.credit_score
        )
        stability: FinancialStability = tables.FINANCIAL_STABILITY_CLASSES.lookup(
            stability_score
        )

        logger.debug(
            "Financial justification %s, DTI %s, liquidity %s, stability %s",
            justification.value,
            debt_to_income,
            liquidity,
            stability.value,
        )

        return Ok(
            FinancialAssessment(
                income_multiplier=income_multiplier,
                max_coverage_by_income=max_by_income,
                max_coverage_by_net_worth=max_by_net_worth,
                max_recommended_coverage=max_recommended,
                financial_justification=justification,
                debt_to_income_ratio=debt_to_income,
                liquidity_ratio=liquidity,
                stability_score=stability_score,
                financial_stability=stability,
                additional_documentation_required=requested_coverage > max_recommended,
            )
        )

    @beartype
    def classify_justification(
        self,
        requested_coverage: Decimal,
        max_by_income: Decimal,
        max_by_net_worth: Decimal,
        max_recommended: Decimal,
    ) -> FinancialJustification:
        """First threshold the requested coverage fits under wins."""
        if requested_coverage <= max_by_income:
            return FinancialJustification.INCOME_REPLACEMENT
        if requested_coverage <= max_by_net_worth:
            return FinancialJustification.ESTATE_PLANNING
        if requested_coverage <= max_recommended:
            return FinancialJustification.BUSINESS_PROTECTION
        return FinancialJustification.INSUFFICIENT_JUSTIFICATION

    @beartype
    def stability_score(
        self, debt_to_income: Decimal, liquidity: Decimal, credit_score: int
    ) -> int:
        """Sum of debt-to-income, liquidity and credit points."""
        return (
            tables.DEBT_TO_INCOME_POINTS.lookup(debt_to_income)
            + tables.LIQUIDITY_POINTS.lookup(liquidity)
            + tables.CREDIT_SCORE_POINTS.lookup(credit_score)
        )
