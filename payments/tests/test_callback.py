from decimal import Decimal

from django.test import SimpleTestCase

from orders.models import PaymentStatus
from payments.callback import decode_callback, map_gateway_status, parse_response
from payments.codec import GatewayCodec
from payments.exceptions import DecodeError, MissingOrderId

KEY = "callback-test-key"


class ParseResponseTests(SimpleTestCase):
    def test_last_duplicate_wins(self):
        self.assertEqual(parse_response("a=1&b=2&a=3"), {"a": "3", "b": "2"})

    def test_blank_values_kept(self):
        self.assertEqual(parse_response("bank_ref_no=&order_id=O1"), {"bank_ref_no": "", "order_id": "O1"})

    def test_percent_escapes_decoded(self):
        self.assertEqual(parse_response("failure_message=Insufficient%20funds")["failure_message"], "Insufficient funds")


class MapGatewayStatusTests(SimpleTestCase):
    def test_success(self):
        self.assertEqual(map_gateway_status("Success"), PaymentStatus.SUCCESS)

    def test_failure_and_aborted(self):
        self.assertEqual(map_gateway_status("Failure"), PaymentStatus.FAILURE)
        self.assertEqual(map_gateway_status("Aborted"), PaymentStatus.FAILURE)

    def test_unknown_fails_closed(self):
        self.assertEqual(map_gateway_status("Invalid"), PaymentStatus.FAILURE)
        self.assertEqual(map_gateway_status("success"), PaymentStatus.FAILURE)

    def test_pending_and_absent_are_not_terminal(self):
        self.assertIsNone(map_gateway_status("Pending"))
        self.assertIsNone(map_gateway_status(""))
        self.assertIsNone(map_gateway_status(None))


class DecodeCallbackTests(SimpleTestCase):
    def setUp(self):
        self.codec = GatewayCodec(KEY)

    def test_full_result(self):
        enc = self.codec.encode(
            "order_id=O1&tracking_id=T1&bank_ref_no=B1&order_status=Success"
            "&failure_message=&amount=150.00&currency=AED&trans_date=05/03/2025 14:22:01"
            "&payment_mode=Credit Card&status_message=Approved"
        )
        result = decode_callback(enc, self.codec)
        self.assertEqual(result.order_id, "O1")
        self.assertEqual(result.tracking_id, "T1")
        self.assertEqual(result.bank_ref_no, "B1")
        self.assertEqual(result.order_status, "Success")
        self.assertEqual(result.amount, Decimal("150.00"))
        self.assertEqual(result.currency, "AED")
        self.assertEqual(result.trans_date, "05/03/2025 14:22:01")
        self.assertEqual(result.payment_mode, "Credit Card")
        self.assertEqual(result.reason, "Approved")

    def test_optional_fields_default_empty(self):
        result = decode_callback(self.codec.encode("order_id=O2"), self.codec)
        self.assertEqual(result.tracking_id, "")
        self.assertEqual(result.order_status, "")
        self.assertIsNone(result.amount)

    def test_unparseable_amount_is_dropped_and_logged(self):
        with self.assertLogs("payments.callback", level="WARNING"):
            result = decode_callback(self.codec.encode("order_id=O3&amount=abc"), self.codec)
        self.assertIsNone(result.amount)

    def test_missing_order_id(self):
        with self.assertRaises(MissingOrderId):
            decode_callback(self.codec.encode("tracking_id=T1&order_status=Success"), self.codec)

    def test_garbage_input(self):
        with self.assertRaises(DecodeError):
            decode_callback("this is not encrypted", self.codec)

    def test_failure_reason_prefers_failure_message(self):
        enc = self.codec.encode("order_id=O4&order_status=Failure&failure_message=Insufficient funds&status_message=Declined")
        self.assertEqual(decode_callback(enc, self.codec).reason, "Insufficient funds")
