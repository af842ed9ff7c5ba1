"""Simplified mortality rate lookup for actuarial illustrations."""

from decimal import Decimal

from beartype import beartype

from ...models.application import Gender
from ...models.assessment import RiskClass
from . import rate_tables as tables


class MortalityRateLookup:
    """Annual mortality rate by age band, gender and overall risk class.

    The table is illustrative and is not sourced from published experience
    studies.
    """

    @beartype
    def lookup(self, age: int, gender: Gender, risk_class: RiskClass) -> Decimal:
        """Return the adjusted annual mortality rate."""
        base_rate: Decimal = tables.BASE_MORTALITY_RATES.lookup(age)
        gender_factor = tables.GENDER_MORTALITY_FACTORS.get(
            gender, tables.DEFAULT_GENDER_MORTALITY_FACTOR
        )
        return base_rate * gender_factor * tables.RISK_CLASS_MORTALITY_FACTORS[risk_class]
