# payments/services.py
import logging
from datetime import datetime

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from orders.models import PaymentMethod, PaymentStatus

from .builder import build_plaintext
from .callback import GATEWAY_FAILURES, map_gateway_status
from .codec import GatewayCodec
from .config import GatewayConfig
from .exceptions import (
    AlreadyCompleted,
    ConcurrentUpdateError,
    InvalidAmount,
    InvalidOrderId,
    InvalidPaymentMethod,
    OrderNotFound,
)
from .responses import DEFAULT_FAILURE_REASON
from .results import (
    OutcomeKind,
    PaymentInitiation,
    PaymentStatusSnapshot,
    ReconciliationOutcome,
    TransactionResult,
)
from .store import DjangoOrderStore, OrderStore, OrderView
from .utils import format_amount, is_valid_order_id

logger = logging.getLogger(__name__)

# attempts at the conditional update before giving up on a hot order
CAS_ATTEMPTS = 3

UNRECOGNIZED_STATUS = "unrecognized status"

GATEWAY_DATE_FORMATS = ("%d/%m/%Y %H:%M:%S", "%d/%m/%Y %H:%M", "%d/%m/%Y")


def _store(store: OrderStore | None) -> OrderStore:
    return store if store is not None else DjangoOrderStore()


def _load_order(order_id, store: OrderStore) -> OrderView:
    if not is_valid_order_id(order_id):
        raise InvalidOrderId()
    order = store.get(order_id)
    if order is None:
        raise OrderNotFound()
    return order


def initiate_payment(order_id, *, config: GatewayConfig, store: OrderStore | None = None) -> PaymentInitiation:
    """Build the encrypted form data the browser posts to the gateway.

    Leaves the order's payment status alone; retrying a Pending, Failure
    or Cancelled order is allowed.
    """
    store = _store(store)
    order = _load_order(order_id, store)

    if order.payment_method != PaymentMethod.ONLINE_GATEWAY:
        raise InvalidPaymentMethod()
    if order.amount is None or order.amount <= 0:
        raise InvalidAmount("Invalid total price for payment")
    if order.payment_status == PaymentStatus.SUCCESS:
        logger.info("Initiate requested for already paid order_id=%s", order.order_id)
        raise AlreadyCompleted()

    plaintext = build_plaintext(order, config)
    enc_request = GatewayCodec(config.working_key).encode(plaintext)
    logger.info(
        "Payment initiated order_id=%s amount=%s %s prior_status=%s",
        order.order_id,
        format_amount(order.amount),
        order.currency,
        order.payment_status,
    )
    return PaymentInitiation(
        payment_url=config.payment_url,
        enc_request=enc_request,
        access_code=config.access_code,
        order_id=order.order_id,
        amount=order.amount,
        currency=order.currency,
    )


def parse_payment_date(raw: str):
    """Gateway trans_date is ``dd/mm/YYYY HH:MM:SS`` (ISO is accepted too)."""
    raw = (raw or "").strip()
    if not raw:
        return None
    for fmt in GATEWAY_DATE_FORMATS:
        try:
            return timezone.make_aware(datetime.strptime(raw, fmt), timezone.get_current_timezone())
        except ValueError:
            continue
    try:
        dt = parse_datetime(raw)
    except ValueError:
        dt = None
    if dt and timezone.is_naive(dt):
        dt = timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


def _mismatch(order: OrderView, result: TransactionResult) -> dict:
    mismatch = {}
    if result.amount is not None and result.amount != order.amount:
        mismatch["amount"] = {"expected": format_amount(order.amount), "reported": format_amount(result.amount)}
    if result.currency and result.currency != order.currency:
        mismatch["currency"] = {"expected": order.currency, "reported": result.currency}
    return mismatch


def _fallback_reason(order_status) -> str:
    if (order_status or "").strip() in GATEWAY_FAILURES:
        return DEFAULT_FAILURE_REASON
    return UNRECOGNIZED_STATUS


def _payment_details(order: OrderView, result: TransactionResult, new_status, mismatch: dict) -> dict:
    paid_at = parse_payment_date(result.trans_date)
    if paid_at is None:
        if result.trans_date:
            logger.warning("Unparseable trans_date %r for order_id=%s", result.trans_date, order.order_id)
        paid_at = timezone.now()

    details = {
        "transactionId": result.tracking_id,
        "bankReferenceNumber": result.bank_ref_no,
        "paymentDate": paid_at.isoformat(),
        "failureReason": "",
        "amountConfirmed": format_amount(result.amount) if result.amount is not None else format_amount(order.amount),
        "currencyConfirmed": result.currency or order.currency,
        "orderStatus": result.order_status,
        "paymentMode": result.payment_mode,
    }
    if new_status == PaymentStatus.FAILURE:
        details["failureReason"] = result.reason or _fallback_reason(result.order_status)
    if mismatch:
        details["mismatch"] = mismatch
    return details


def reconcile(result: TransactionResult, *, store: OrderStore | None = None) -> ReconciliationOutcome:
    """Apply a decoded callback to its order.

    Success is terminal: once stored, later callbacks for the same order
    are ignored. The status write is a compare-and-set against the status
    read here, re-read on contention.
    """
    store = _store(store)
    new_status = map_gateway_status(result.order_status)

    for _ in range(CAS_ATTEMPTS):
        order = store.get(result.order_id)
        if order is None:
            logger.warning("Callback for unknown order_id=%s (order_status=%s)", result.order_id, result.order_status)
            return ReconciliationOutcome(OutcomeKind.ORDER_ID_NOT_FOUND, result.order_id, reason="Order not found")

        if order.payment_status == PaymentStatus.SUCCESS:
            logger.info(
                "Ignoring callback for completed order_id=%s (order_status=%s tracking_id=%s)",
                order.order_id,
                result.order_status,
                result.tracking_id,
            )
            return ReconciliationOutcome(OutcomeKind.ALREADY_FINAL, order.order_id, PaymentStatus.SUCCESS)

        if new_status is None:
            logger.warning(
                "Non-terminal callback for order_id=%s (order_status=%r); leaving status %s",
                order.order_id,
                result.order_status,
                order.payment_status,
            )
            return ReconciliationOutcome(
                OutcomeKind.NO_CHANGE, order.order_id, order.payment_status, reason="Payment is pending confirmation"
            )

        mismatch = _mismatch(order, result)
        if mismatch:
            logger.warning("Gateway reported different charge for order_id=%s: %s", order.order_id, mismatch)

        details = _payment_details(order, result, new_status, mismatch)
        if store.compare_and_set_payment_status(order.order_id, order.payment_status, new_status, details):
            logger.info(
                "Reconciled order_id=%s %s -> %s tracking_id=%s",
                order.order_id,
                order.payment_status,
                new_status,
                result.tracking_id,
            )
            return ReconciliationOutcome(
                OutcomeKind.APPLIED,
                order.order_id,
                new_status,
                reason=details["failureReason"],
                mismatch=mismatch,
            )
        logger.info("Payment status of order_id=%s changed underneath callback; re-reading", order.order_id)

    logger.error("Gave up reconciling order_id=%s after %s attempts", result.order_id, CAS_ATTEMPTS)
    raise ConcurrentUpdateError()


def cancel_payment(order_id, *, store: OrderStore | None = None) -> str:
    """Mark the order Cancelled unless it is already paid.

    Returns the payment status the order ends up with.
    """
    store = _store(store)
    for _ in range(CAS_ATTEMPTS):
        order = _load_order(order_id, store)
        if order.payment_status == PaymentStatus.SUCCESS:
            logger.info("Cancel ignored for completed order_id=%s", order.order_id)
            return PaymentStatus.SUCCESS
        if order.payment_status == PaymentStatus.CANCELLED:
            return PaymentStatus.CANCELLED
        if store.compare_and_set_payment_status(order.order_id, order.payment_status, PaymentStatus.CANCELLED):
            logger.info("Payment cancelled order_id=%s (was %s)", order.order_id, order.payment_status)
            return PaymentStatus.CANCELLED

    logger.error("Gave up cancelling order_id=%s after %s attempts", order_id, CAS_ATTEMPTS)
    raise ConcurrentUpdateError()


def get_payment_status(order_id, *, store: OrderStore | None = None) -> PaymentStatusSnapshot:
    order = _load_order(order_id, _store(store))
    return PaymentStatusSnapshot(
        order_id=order.order_id,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        payment_details=order.payment_details or {},
        amount=order.amount,
        currency=order.currency,
    )
