import json
import logging
from dataclasses import replace

from django.core.exceptions import ImproperlyConfigured
from django.http import JsonResponse
from django.urls import reverse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from .callback import decode_callback
from .codec import GatewayCodec
from .config import GatewayConfig
from .exceptions import (
    CryptoError,
    DecodeError,
    MissingOrderId,
    MissingParameter,
    PaymentError,
    ValidationError,
)
from .responses import CANCELLED, FAILURE, page_for_status, redirect_for_outcome, redirect_page
from .services import cancel_payment, get_payment_status, initiate_payment, reconcile

logger = logging.getLogger(__name__)


def _json_body(request):
    try: return json.loads(request.body.decode("utf-8"))
    except Exception: return None


def _error_response(exc: PaymentError):
    return JsonResponse(
        {"ok": False, "error": exc.error_code, "message": exc.message},
        status=exc.status_code,
    )


def _gateway_config(request) -> GatewayConfig:
    """Settings-backed config; blank callback/cancel URLs point back at this server."""
    config = GatewayConfig.from_settings()
    return replace(
        config,
        callback_url=config.callback_url or request.build_absolute_uri(reverse("payments:callback")),
        cancel_url=config.cancel_url or request.build_absolute_uri(reverse("payments:cancel")),
    )


@csrf_exempt
@require_POST
def initiate_payment_view(request):
    body = _json_body(request)
    if not isinstance(body, dict):
        return _error_response(ValidationError("Invalid JSON body"))
    order_id = body.get("orderId") or body.get("serviceRequestId")
    if not order_id:
        return _error_response(MissingParameter("orderId is required"))

    try:
        result = initiate_payment(order_id, config=_gateway_config(request))
    except ImproperlyConfigured:
        logger.exception("Payment gateway is not configured; cannot initiate order_id=%s", order_id)
        return _error_response(CryptoError("Payment gateway is not configured"))
    except CryptoError:
        logger.exception("Encrypting payment request failed for order_id=%s", order_id)
        return _error_response(CryptoError("Failed to generate encrypted payment data"))
    except PaymentError as e:
        return _error_response(e)

    return JsonResponse(result.as_response(), status=200)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def payment_callback_view(request):
    """
    The gateway sends the customer's browser here with ``encResponse``.
    This view always answers with a redirect page; errors are logged, never
    raised back to the gateway.
    """
    config = GatewayConfig.from_settings()
    enc_response = (
        request.POST.get("encResponse")
        or request.POST.get("encResp")
        or request.GET.get("encResponse")
        or request.GET.get("encResp")
        or ""
    )
    if not enc_response:
        logger.error(
            "Callback without encResponse: method=%s content_type=%s post_keys=%s query_keys=%s",
            request.method,
            request.content_type,
            sorted(request.POST.keys()),
            sorted(request.GET.keys()),
        )
        return redirect_page(request, FAILURE, "", config, "Missing payment response")

    try:
        result = decode_callback(enc_response, GatewayCodec(config.working_key))
    except DecodeError as e:
        logger.warning("Could not decrypt callback (%s chars): %s", len(enc_response), e.message)
        return redirect_page(request, FAILURE, "", config, "Invalid payment response")
    except MissingOrderId:
        logger.warning("Decrypted callback carries no order_id")
        return redirect_page(request, FAILURE, "", config, "Invalid payment response")
    except Exception:
        logger.exception("Unexpected error decoding payment callback")
        return redirect_page(request, FAILURE, "", config, "Payment could not be verified")

    try:
        outcome = reconcile(result)
    except Exception:
        logger.exception("Reconciling callback failed for order_id=%s: %s", result.order_id, result)
        return redirect_page(request, FAILURE, result.order_id, config, "Payment could not be verified")

    return redirect_for_outcome(request, outcome, config)


@require_GET
def payment_cancel_view(request):
    order_id = request.GET.get("orderId") or ""
    if not order_id:
        return _error_response(MissingParameter("Order ID is required"))

    try:
        status = cancel_payment(order_id)
    except PaymentError as e:
        return _error_response(e)

    config = GatewayConfig.from_settings()
    kind = page_for_status(status)
    if kind != CANCELLED:
        logger.info("Cancel redirect for order_id=%s lands on %s page", order_id, kind)
    return redirect_page(request, kind, order_id, config)


@require_GET
def payment_status_view(request, order_id: str):
    try:
        snapshot = get_payment_status(order_id)
    except PaymentError as e:
        return _error_response(e)
    return JsonResponse(snapshot.as_response(), status=200)
