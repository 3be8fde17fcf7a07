"""Pricing resolver for booking periods.

A booked period is priced either from one of the unit's pricing offers
(nightly rate x nights) or from an operator-entered total. Totals keep
full precision; ``round_eur`` is for display only.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from rentals.models import (
    CustomPricing,
    InvalidPriceError,
    OfferNotFoundError,
    OfferPricing,
    PriceQuote,
    PricingOffer,
    PricingSelection,
)
from rentals.utils.dates import nights_between

CENT = Decimal("0.01")


def round_eur(value: Decimal) -> Decimal:
    """Round an EUR amount to cents, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class PricingResolver:
    """Computes booking totals from a pricing selection."""

    def resolve_total(
        self,
        offers: Sequence[PricingOffer],
        start: dt.date,
        end: dt.date,
        selection: PricingSelection | None,
    ) -> Decimal:
        """Compute the total price of a stay.

        Args:
            offers: The unit's pricing offers
            start: First night
            end: Check-out day
            selection: Offer reference or custom total

        Returns:
            Full-precision EUR total

        Raises:
            OfferNotFoundError: If the referenced offer is not on the unit
            InvalidPriceError: If the custom total is not positive or nothing was selected
        """
        return self.quote(offers, start, end, selection).total_eur

    def quote(
        self,
        offers: Sequence[PricingOffer],
        start: dt.date,
        end: dt.date,
        selection: PricingSelection | None,
    ) -> PriceQuote:
        """Build a price breakdown for a stay.

        Raises the same errors as ``resolve_total``.
        """
        nights = nights_between(start, end)

        if selection is None:
            raise InvalidPriceError(details={"reason": "missing"})

        if isinstance(selection, OfferPricing):
            offer = self._find_offer(offers, selection.offer_id)
            total = offer.price_per_night_eur * nights
            return PriceQuote(
                start=start,
                end=end,
                nights=nights,
                offer_id=offer.offer_id,
                nightly_rate_eur=offer.price_per_night_eur,
                total_eur=total,
                display_total_eur=round_eur(total),
            )

        if isinstance(selection, CustomPricing):
            total = selection.custom_total_eur
            if total <= 0:
                raise InvalidPriceError(
                    details={"reason": "not_positive", "custom_total_eur": str(total)}
                )
            return PriceQuote(
                start=start,
                end=end,
                nights=nights,
                total_eur=total,
                display_total_eur=round_eur(total),
            )

        raise InvalidPriceError(details={"reason": "unknown_selection"})

    def _find_offer(self, offers: Sequence[PricingOffer], offer_id: str) -> PricingOffer:
        for offer in offers:
            if offer.offer_id == offer_id:
                return offer
        raise OfferNotFoundError(details={"offer_id": offer_id})
