"""Plaintext request payload for the hosted checkout."""

from decimal import Decimal
from urllib.parse import urlencode

from .config import GatewayConfig
from .exceptions import InvalidAmount, InvalidCurrency, InvalidOrderId
from .store import OrderView
from .utils import format_amount

# separators of the plaintext payload; never allowed inside customer text
PAYLOAD_SEPARATORS = str.maketrans({"&": " ", "=": " "})


def cancel_url_for(order_id: str, cancel_url: str) -> str:
    sep = "&" if "?" in cancel_url else "?"
    return f"{cancel_url}{sep}{urlencode({'orderId': order_id})}"


def clean_text(value) -> str:
    """Customer-entered text with payload separators blanked out."""
    return " ".join(str(value or "").translate(PAYLOAD_SEPARATORS).split())


def build_request_params(order: OrderView, config: GatewayConfig) -> list[tuple[str, str]]:
    """Return the ordered ``(key, value)`` pairs the gateway expects.

    Values are left unescaped; only the final form post is encoded.
    Customer-entered billing fields go through :func:`clean_text` so they
    cannot add keys of their own.
    """
    if not order.order_id:
        raise InvalidOrderId("Order ID is required")
    if order.amount is None or Decimal(str(order.amount)) <= 0:
        raise InvalidAmount("Amount must be greater than zero")
    if not order.currency:
        raise InvalidCurrency()

    return [
        ("merchant_id", config.merchant_id),
        ("order_id", order.order_id),
        ("amount", format_amount(order.amount)),
        ("currency", order.currency),
        ("redirect_url", config.callback_url),
        ("cancel_url", cancel_url_for(order.order_id, config.cancel_url)),
        ("language", config.language),
        ("billing_name", clean_text(order.customer_name)),
        ("billing_address", clean_text(order.billing_address)),
        ("billing_country", clean_text(order.billing_country)),
        ("billing_tel", clean_text(order.customer_phone)),
        ("billing_email", clean_text(order.customer_email)),
        # echoed back in the callback for support lookups
        ("merchant_param1", order.order_id),
    ]


def build_plaintext(order: OrderView, config: GatewayConfig) -> str:
    return "&".join(f"{k}={v}" for k, v in build_request_params(order, config))
