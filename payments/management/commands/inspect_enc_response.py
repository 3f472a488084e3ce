from django.core.management.base import BaseCommand, CommandError

from payments.callback import decode_callback
from payments.codec import GatewayCodec
from payments.config import GatewayConfig
from payments.exceptions import PaymentError
from payments.results import OutcomeKind
from payments.services import reconcile


class Command(BaseCommand):
    help = "Decrypt a captured CCAvenue encResponse and optionally reconcile it"

    def add_arguments(self, parser):
        parser.add_argument("enc_response", help="Hex encResponse as posted by the gateway")
        parser.add_argument("--apply", action="store_true", help="Reconcile the decoded result against the order")

    def handle(self, *args, **opts):
        config = GatewayConfig.from_settings()
        try:
            result = decode_callback(opts["enc_response"], GatewayCodec(config.working_key))
        except PaymentError as e:
            raise CommandError(f"{e.error_code}: {e.message}")

        for name in ("order_id", "order_status", "tracking_id", "bank_ref_no", "amount", "currency",
                     "trans_date", "payment_mode", "failure_message", "status_message"):
            self.stdout.write(f"{name}: {getattr(result, name)}")

        if not opts["apply"]:
            return

        try:
            outcome = reconcile(result)
        except PaymentError as e:
            raise CommandError(f"{e.error_code}: {e.message}")
        msg = f"{outcome.order_id}: {outcome.kind.value} -> {outcome.payment_status or 'unchanged'}"
        if outcome.kind == OutcomeKind.APPLIED:
            self.stdout.write(self.style.SUCCESS(msg))
        else:
            self.stdout.write(self.style.WARNING(msg))
