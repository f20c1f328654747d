"""
Tier pricing derived purely from the row index.

Rows are split into three contiguous bands:
  [0, premium_row_bound)                   -> Premium
  [premium_row_bound, standard_row_bound)  -> Standard
  [standard_row_bound, ...)                -> Economy
"""

from pydantic import BaseModel

from seat_booking.core.config import Settings
from seat_booking.models.seat import Grid, SeatStatus


class PricingTier(BaseModel):
    label: str
    type: str
    price: int
    first_row: int
    last_row: int  # inclusive

    model_config = {"frozen": True}


class PricingPolicy:
    def __init__(
        self,
        premium_row_bound: int = 3,
        standard_row_bound: int = 6,
        premium_price: int = 1000,
        standard_price: int = 750,
        economy_price: int = 500,
    ):
        if not 0 <= premium_row_bound <= standard_row_bound:
            raise ValueError("premium_row_bound must not exceed standard_row_bound")
        if min(premium_price, standard_price, economy_price) <= 0:
            raise ValueError("tier prices must be positive")

        self.premium_row_bound = premium_row_bound
        self.standard_row_bound = standard_row_bound
        self.premium_price = premium_price
        self.standard_price = standard_price
        self.economy_price = economy_price

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingPolicy":
        return cls(
            premium_row_bound=settings.PREMIUM_ROW_BOUND,
            standard_row_bound=settings.STANDARD_ROW_BOUND,
            premium_price=settings.PREMIUM_PRICE,
            standard_price=settings.STANDARD_PRICE,
            economy_price=settings.ECONOMY_PRICE,
        )

    def tier_of(self, row: int, total_rows: int = 0) -> PricingTier:
        """
        Tier for a row. `total_rows` only fills in the economy band's last row;
        it does not affect the label or price.
        """
        if row < self.premium_row_bound:
            return PricingTier(
                label="Premium",
                type="premium",
                price=self.premium_price,
                first_row=0,
                last_row=self.premium_row_bound - 1,
            )
        if row < self.standard_row_bound:
            return PricingTier(
                label="Standard",
                type="standard",
                price=self.standard_price,
                first_row=self.premium_row_bound,
                last_row=self.standard_row_bound - 1,
            )
        return PricingTier(
            label="Economy",
            type="economy",
            price=self.economy_price,
            first_row=self.standard_row_bound,
            last_row=max(total_rows - 1, row),
        )

    def price_of_seat(self, row: int) -> int:
        return self.tier_of(row).price

    def total_price(self, grid: Grid) -> int:
        """Sum of seat prices over every selected seat."""
        return sum(
            self.price_of_seat(seat.row)
            for seat in grid.iter_seats()
            if seat.status == SeatStatus.SELECTED
        )

    def tiers(self, total_rows: int) -> list[PricingTier]:
        """Distinct tiers present in a grid of `total_rows` rows, top to bottom."""
        result: list[PricingTier] = []
        for row in range(total_rows):
            tier = self.tier_of(row, total_rows)
            if not result or result[-1].type != tier.type:
                result.append(tier)
        return result
