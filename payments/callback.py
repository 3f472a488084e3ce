"""
Decoding of the gateway's encResponse callback.

The decrypted payload is a form-style ``key=value&...`` string. It is parsed
once into a :class:`TransactionResult`; nothing downstream handles the raw
mapping.
"""

import logging
from urllib.parse import parse_qsl

from orders.models import PaymentStatus

from .codec import GatewayCodec
from .exceptions import MissingOrderId
from .results import TransactionResult
from .utils import parse_amount

logger = logging.getLogger(__name__)

GATEWAY_SUCCESS = "Success"
GATEWAY_PENDING = "Pending"
GATEWAY_FAILURES = ("Failure", "Aborted")


def parse_response(plaintext: str) -> dict:
    # dict() keeps the last value of a repeated key
    return dict(parse_qsl(plaintext or "", keep_blank_values=True))


def map_gateway_status(raw: str | None) -> PaymentStatus | None:
    """Map the gateway ``order_status`` vocabulary onto ours.

    ``None`` means the callback carries no terminal outcome (pending or
    absent). Anything other than an explicit success fails closed.
    """
    status = (raw or "").strip()
    if status == GATEWAY_SUCCESS:
        return PaymentStatus.SUCCESS
    if not status or status == GATEWAY_PENDING:
        return None
    return PaymentStatus.FAILURE


def result_from_fields(fields: dict) -> TransactionResult:
    order_id = (fields.get("order_id") or "").strip()
    if not order_id:
        raise MissingOrderId()

    raw_amount = fields.get("amount")
    amount = parse_amount(raw_amount)
    if raw_amount and amount is None:
        logger.warning("Unparseable amount %r in callback for order_id=%s", raw_amount, order_id)

    return TransactionResult(
        order_id=order_id,
        tracking_id=fields.get("tracking_id", ""),
        bank_ref_no=fields.get("bank_ref_no", ""),
        order_status=fields.get("order_status", ""),
        failure_message=fields.get("failure_message", ""),
        status_message=fields.get("status_message", ""),
        amount=amount,
        currency=fields.get("currency", ""),
        trans_date=fields.get("trans_date", ""),
        payment_mode=fields.get("payment_mode", ""),
    )


def decode_callback(enc_response: str, codec: GatewayCodec) -> TransactionResult:
    """Decrypt and parse an encResponse.

    Raises :class:`DecodeError` when decryption fails and
    :class:`MissingOrderId` when there is nothing to reconcile against.
    """
    fields = parse_response(codec.decode(enc_response))
    result = result_from_fields(fields)
    logger.info(
        "Decoded callback order_id=%s order_status=%s tracking_id=%s",
        result.order_id,
        result.order_status,
        result.tracking_id,
    )
    return result
