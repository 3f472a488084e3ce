from django.test import RequestFactory, SimpleTestCase

from orders.models import PaymentStatus
from payments.config import GatewayConfig
from payments.responses import FAILURE, build_redirect_url, redirect_for_outcome
from payments.results import OutcomeKind, ReconciliationOutcome

CONFIG = GatewayConfig(merchant_id="m", access_code="a", working_key="k", payment_url="p",
                       frontend_url="https://shop.example/")


class BuildRedirectUrlTests(SimpleTestCase):
    def test_success(self):
        self.assertEqual(build_redirect_url("success", "O1", CONFIG), "https://shop.example/payment/success?orderId=O1")

    def test_failure_has_default_reason(self):
        self.assertEqual(
            build_redirect_url(FAILURE, "O1", CONFIG),
            "https://shop.example/payment/failure?orderId=O1&reason=Payment+failed",
        )

    def test_reason_is_escaped(self):
        url = build_redirect_url(FAILURE, "O1", CONFIG, reason='Card "declined" & <b>')
        self.assertIn("reason=Card+%22declined%22+%26+%3Cb%3E", url)

    def test_cancelled_has_no_reason(self):
        self.assertEqual(
            build_redirect_url("cancelled", "O3", CONFIG, reason="ignored"),
            "https://shop.example/payment/cancelled?orderId=O3",
        )


class RedirectForOutcomeTests(SimpleTestCase):
    def setUp(self):
        self.request = RequestFactory().get("/payments/callback")

    def _url(self, outcome):
        resp = redirect_for_outcome(self.request, outcome, CONFIG)
        self.assertEqual(resp.status_code, 200)
        return resp.content.decode()

    def test_already_final_goes_to_success(self):
        html = self._url(ReconciliationOutcome(OutcomeKind.ALREADY_FINAL, "O1", PaymentStatus.SUCCESS))
        self.assertIn("/payment/success?orderId=O1", html)

    def test_pending_goes_to_failure_with_reason(self):
        html = self._url(ReconciliationOutcome(OutcomeKind.NO_CHANGE, "O1", PaymentStatus.PENDING,
                                               reason="Payment is pending confirmation"))
        self.assertIn("reason=Payment+is+pending+confirmation", html)

    def test_unknown_order_goes_to_failure(self):
        html = self._url(ReconciliationOutcome(OutcomeKind.ORDER_ID_NOT_FOUND, "GHOST", reason="Order not found"))
        self.assertIn("/payment/failure?orderId=GHOST", html)
