"""
Terminal pages for the browser coming back from the gateway.

The gateway can only hand the customer's browser to us, so every callback
and cancellation answers with a small HTML page that forwards to the
frontend's success, failure or cancelled page.
"""

from urllib.parse import urlencode

from django.shortcuts import render

from orders.models import PaymentStatus

from .config import GatewayConfig
from .results import OutcomeKind, ReconciliationOutcome

SUCCESS = "success"
FAILURE = "failure"
CANCELLED = "cancelled"

TITLES = {
    SUCCESS: "Payment Success",
    FAILURE: "Payment Failed",
    CANCELLED: "Payment Cancelled",
}

DEFAULT_FAILURE_REASON = "Payment failed"


def build_redirect_url(kind: str, order_id: str, config: GatewayConfig, reason: str | None = None) -> str:
    base = config.frontend_url.rstrip("/")
    params = {"orderId": order_id or ""}
    if kind == FAILURE:
        params["reason"] = reason or DEFAULT_FAILURE_REASON
    return f"{base}/payment/{kind}?{urlencode(params)}"


def redirect_page(request, kind: str, order_id: str, config: GatewayConfig, reason: str | None = None):
    ctx = {
        "title": TITLES[kind],
        "kind": kind,
        "redirect_url": build_redirect_url(kind, order_id, config, reason),
    }
    return render(request, "payments/redirect.html", ctx)


def page_for_status(status) -> str:
    if status == PaymentStatus.SUCCESS:
        return SUCCESS
    if status == PaymentStatus.CANCELLED:
        return CANCELLED
    return FAILURE


def redirect_for_outcome(request, outcome: ReconciliationOutcome, config: GatewayConfig):
    if outcome.kind == OutcomeKind.ORDER_ID_NOT_FOUND:
        return redirect_page(request, FAILURE, outcome.order_id, config, outcome.reason)
    kind = page_for_status(outcome.payment_status)
    return redirect_page(request, kind, outcome.order_id, config, outcome.reason)
