"""
Error taxonomy for the payment lifecycle.

Every error carries the HTTP status and the machine-readable code the JSON
endpoints return, so views can translate any of them with one handler.
Messages are safe to show to API clients and never contain key material
or decrypted payloads.
"""


class PaymentError(Exception):
    """Base for all payment lifecycle errors."""

    status_code = 500
    error_code = "PAYMENT_ERROR"
    default_message = "Payment processing failed"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PaymentError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Invalid payment request"


class InvalidOrderId(ValidationError):
    error_code = "INVALID_ORDER_ID"
    default_message = "Invalid order ID"


class MissingParameter(ValidationError):
    error_code = "MISSING_PARAMETER"
    default_message = "Required parameter missing"


class InvalidPaymentMethod(ValidationError):
    error_code = "INVALID_PAYMENT_METHOD"
    default_message = "Payment method is not Online Payment"


class InvalidAmount(ValidationError):
    error_code = "INVALID_AMOUNT"
    default_message = "Invalid amount for payment"


class InvalidCurrency(ValidationError):
    error_code = "INVALID_CURRENCY"
    default_message = "Currency is required"


class NotFoundError(PaymentError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class OrderNotFound(NotFoundError):
    error_code = "ORDER_NOT_FOUND"
    default_message = "Order not found"


class ConflictError(PaymentError):
    status_code = 400
    error_code = "CONFLICT"
    default_message = "Conflicting payment state"


class AlreadyCompleted(ConflictError):
    error_code = "PAYMENT_ALREADY_COMPLETED"
    default_message = "Payment already completed for this order"


class ConcurrentUpdateError(ConflictError):
    error_code = "CONCURRENT_UPDATE"
    default_message = "Order payment status changed concurrently"


class CryptoError(PaymentError):
    status_code = 500
    error_code = "CRYPTO_ERROR"
    default_message = "Failed to process encrypted payment data"


class DecodeError(CryptoError):
    error_code = "DECODE_ERROR"
    default_message = "Could not decrypt gateway payload"


class UpstreamDataError(PaymentError):
    status_code = 400
    error_code = "UPSTREAM_DATA_ERROR"
    default_message = "Malformed gateway response"


class MissingOrderId(UpstreamDataError):
    error_code = "ORDER_ID_NOT_FOUND"
    default_message = "Order ID not found in payment response"
