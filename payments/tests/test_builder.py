from decimal import Decimal
from urllib.parse import parse_qsl

from django.test import SimpleTestCase

from payments.builder import build_plaintext, build_request_params, cancel_url_for, clean_text
from payments.config import GatewayConfig
from payments.exceptions import InvalidAmount, InvalidCurrency, InvalidOrderId, ValidationError
from payments.store import OrderView

CONFIG = GatewayConfig(
    merchant_id="45990",
    access_code="AVTEST",
    working_key="k",
    payment_url="https://gateway.test/pay",
    callback_url="https://api.test/payments/callback",
    cancel_url="https://api.test/payments/cancel",
)


def make_order(**kw):
    values = dict(
        order_id="O1",
        amount=Decimal("150"),
        currency="AED",
        payment_method="OnlineGateway",
        payment_status="Pending",
        customer_name="Test User",
        customer_email="test@example.com",
        customer_phone="+971501234567",
        billing_address="123 Test Street, Dubai",
        billing_country="AE",
    )
    values.update(kw)
    return OrderView(**values)


class BuildRequestTests(SimpleTestCase):
    def test_required_fields_lead_in_gateway_order(self):
        keys = [k for k, _ in build_request_params(make_order(), CONFIG)]
        self.assertEqual(
            keys[:6],
            ["merchant_id", "order_id", "amount", "currency", "redirect_url", "cancel_url"],
        )

    def test_values(self):
        params = dict(build_request_params(make_order(), CONFIG))
        self.assertEqual(params["merchant_id"], "45990")
        self.assertEqual(params["order_id"], "O1")
        self.assertEqual(params["amount"], "150.00")
        self.assertEqual(params["currency"], "AED")
        self.assertEqual(params["redirect_url"], "https://api.test/payments/callback")
        self.assertEqual(params["cancel_url"], "https://api.test/payments/cancel?orderId=O1")
        self.assertEqual(params["merchant_param1"], "O1")
        self.assertEqual(params["language"], "EN")

    def test_amount_rounds_half_up_to_two_places(self):
        params = dict(build_request_params(make_order(amount=Decimal("10.005")), CONFIG))
        self.assertEqual(params["amount"], "10.01")

    def test_plaintext_is_unescaped(self):
        plain = build_plaintext(make_order(), CONFIG)
        self.assertTrue(plain.startswith("merchant_id=45990&order_id=O1&amount=150.00&currency=AED&"))
        self.assertIn("redirect_url=https://api.test/payments/callback&", plain)
        self.assertIn("billing_tel=+971501234567", plain)
        self.assertIn("billing_address=123 Test Street, Dubai", plain)

    def test_billing_text_cannot_override_amount_or_currency(self):
        order = make_order(billing_address="Flat 1&amount=1.00&currency=USD", customer_name="Smith & Sons")
        fields = dict(parse_qsl(build_plaintext(order, CONFIG)))
        self.assertEqual(fields["amount"], "150.00")
        self.assertEqual(fields["currency"], "AED")
        self.assertEqual(fields["billing_name"], "Smith Sons")
        self.assertEqual(fields["billing_address"], "Flat 1 amount 1.00 currency USD")

    def test_clean_text(self):
        self.assertEqual(clean_text("a=b&&c"), "a b c")
        self.assertEqual(clean_text(None), "")

    def test_rejects_non_positive_amount(self):
        for amount in (Decimal("0"), Decimal("-5")):
            with self.assertRaises(InvalidAmount):
                build_request_params(make_order(amount=amount), CONFIG)

    def test_rejects_empty_currency(self):
        with self.assertRaises(InvalidCurrency):
            build_request_params(make_order(currency=""), CONFIG)

    def test_rejects_empty_order_id(self):
        with self.assertRaises(InvalidOrderId):
            build_request_params(make_order(order_id=""), CONFIG)

    def test_builder_errors_are_validation_errors(self):
        with self.assertRaises(ValidationError) as cm:
            build_request_params(make_order(currency=""), CONFIG)
        self.assertEqual(cm.exception.status_code, 400)


class CancelUrlTests(SimpleTestCase):
    def test_appends_query(self):
        self.assertEqual(cancel_url_for("O1", "https://x/cancel"), "https://x/cancel?orderId=O1")

    def test_extends_existing_query(self):
        self.assertEqual(cancel_url_for("O1", "https://x/cancel?src=cc"), "https://x/cancel?src=cc&orderId=O1")
