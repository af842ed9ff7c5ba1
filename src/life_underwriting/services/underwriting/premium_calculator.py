"""Premium calculation from coverage amount and rating factors."""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext

from beartype import beartype

from ...core.config import UnderwritingSettings, get_settings
from ...core.logging_utils import get_logger
from ...models.assessment import FACTOR_PRECISION

logger = get_logger(__name__)

PENNY = Decimal("0.01")


class PremiumCalculator:
    """Apply a rating factor map to a base rate and coverage amount."""

    def __init__(self, settings: UnderwritingSettings | None = None) -> None:
        """Initialize the calculator.

        Args:
            settings: Engine settings; the cached settings are used when omitted
        """
        self._settings = settings or get_settings()

    @property
    def base_rate(self) -> Decimal:
        return self._settings.base_premium_rate

    @property
    def minimum_premium(self) -> Decimal:
        return self._settings.minimum_premium

    @beartype
    def calculate(
        self, coverage_amount: Decimal, rating_factors: Mapping[str, Decimal]
    ) -> Decimal:
        """Calculate the annual premium.

        ``coverage x base rate`` multiplied by every factor, floored at the
        minimum premium and rounded half-up to the cent. Sentinel factors make
        the premium enormous; it is still computed for the audit trail.

        Args:
            coverage_amount: Face amount of the policy
            rating_factors: Category name -> multiplicative factor

        Returns:
            Premium rounded to 2 decimal places
        """
        with localcontext() as ctx:
            ctx.prec = FACTOR_PRECISION
            premium = coverage_amount * self.base_rate
            for factor in rating_factors.values():
                premium *= factor

            if premium < self.minimum_premium:
                logger.debug(
                    "Premium %s below minimum, using %s", premium, self.minimum_premium
                )
                premium = self.minimum_premium

            return premium.quantize(PENNY, rounding=ROUND_HALF_UP)
