"""Typed values passed between the payment lifecycle components."""

import enum
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class PaymentInitiation:
    payment_url: str
    enc_request: str
    access_code: str
    order_id: str
    amount: Decimal
    currency: str

    def as_response(self) -> dict:
        return {
            "paymentUrl": self.payment_url,
            "paymentFormData": {
                "encRequest": self.enc_request,
                "access_code": self.access_code,
            },
            "orderId": self.order_id,
            "amount": self.amount,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class TransactionResult:
    """Decoded gateway callback. Optional fields default to empty."""

    order_id: str
    tracking_id: str = ""
    bank_ref_no: str = ""
    order_status: str = ""
    failure_message: str = ""
    status_message: str = ""
    amount: Decimal | None = None
    currency: str = ""
    trans_date: str = ""
    payment_mode: str = ""

    @property
    def reason(self) -> str:
        return self.failure_message or self.status_message


class OutcomeKind(enum.Enum):
    APPLIED = "applied"
    ALREADY_FINAL = "already_final"
    ORDER_ID_NOT_FOUND = "order_id_not_found"
    NO_CHANGE = "no_change"


@dataclass(frozen=True)
class ReconciliationOutcome:
    kind: OutcomeKind
    order_id: str
    payment_status: str | None = None
    reason: str = ""
    mismatch: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentStatusSnapshot:
    order_id: str
    payment_method: str
    payment_status: str
    payment_details: dict
    amount: Decimal
    currency: str

    def as_response(self) -> dict:
        return {
            "serviceRequestId": self.order_id,
            "orderId": self.order_id,
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "paymentDetails": self.payment_details,
            "totalPrice": self.amount,
            "currency": self.currency,
        }
