from decimal import Decimal

from django.test import TestCase, override_settings

from payments.utils import is_valid_order_id

from .models import Order, PaymentMethod, PaymentStatus
from .utils import generate_order_id


class OrderDefaultsTests(TestCase):
    def test_new_order_is_pending_without_details(self):
        order = Order.objects.create(amount=Decimal("99.50"), payment_method=PaymentMethod.ONLINE_GATEWAY)
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)
        self.assertIsNone(order.payment_details)
        self.assertFalse(order.is_paid)
        self.assertTrue(order.order_id)

    @override_settings(CCAVENUE={"CURRENCY": "USD"})
    def test_currency_defaults_to_configured_currency(self):
        order = Order.objects.create(amount=Decimal("1.00"))
        self.assertEqual(order.currency, "USD")


class GenerateOrderIdTests(TestCase):
    def test_alnum_and_short_enough_for_gateway(self):
        oid = generate_order_id()
        self.assertLessEqual(len(oid), 20)
        self.assertTrue(oid.isalnum())

    def test_accepted_by_payment_order_id_check(self):
        self.assertTrue(is_valid_order_id(generate_order_id()))
        self.assertTrue(generate_order_id(prefix="SR").startswith("SR"))

    def test_unique_enough(self):
        self.assertEqual(len({generate_order_id() for _ in range(50)}), 50)
