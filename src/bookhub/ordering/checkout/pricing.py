"""Checkout pricing: cart subtotal plus GST."""

from dataclasses import dataclass

from bookhub.shared.config import DEFAULT_TAX_RATE


@dataclass(frozen=True)
class CheckoutPricing:
    """Amounts shown at checkout and charged through the gateway, in major units."""

    subtotal: float
    tax: float
    total: float

    @property
    def amount_minor_units(self) -> int:
        return round(self.total * 100)


def price_cart(subtotal: float, tax_rate: float = DEFAULT_TAX_RATE) -> CheckoutPricing:
    subtotal = round(subtotal, 2)
    tax = round(subtotal * tax_rate, 2)
    return CheckoutPricing(subtotal=subtotal, tax=tax, total=round(subtotal + tax, 2))
