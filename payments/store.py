"""
Order store collaborator.

The payment services only see an :class:`OrderView` snapshot and mutate
payment state through :meth:`OrderStore.compare_and_set_payment_status`,
which must be a single atomic conditional update.
"""

from dataclasses import dataclass
from decimal import Decimal

from django.utils import timezone

from orders.models import Order


@dataclass(frozen=True)
class OrderView:
    order_id: str
    amount: Decimal
    currency: str
    payment_method: str
    payment_status: str
    payment_details: dict | None = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    billing_address: str = ""
    billing_country: str = ""


class OrderStore:
    """Interface the payment lifecycle needs from the order store."""

    def get(self, order_id: str) -> OrderView | None:
        raise NotImplementedError

    def compare_and_set_payment_status(
        self,
        order_id: str,
        expected_current: str,
        new_status: str,
        details: dict | None = None,
    ) -> bool:
        """Set ``new_status`` only if the stored status is still ``expected_current``.

        ``details`` replaces ``payment_details`` when given; ``None`` leaves
        them untouched. Returns whether a row was updated.
        """
        raise NotImplementedError


class DjangoOrderStore(OrderStore):

    def get(self, order_id):
        order = Order.objects.filter(order_id=order_id).first()
        if order is None:
            return None
        return OrderView(
            order_id=order.order_id,
            amount=order.amount,
            currency=order.currency,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            payment_details=order.payment_details,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            billing_address=order.billing_address,
            billing_country=order.billing_country,
        )

    def compare_and_set_payment_status(self, order_id, expected_current, new_status, details=None):
        # update() skips auto_now, so stamp updated_at ourselves
        fields = {"payment_status": new_status, "updated_at": timezone.now()}
        if details is not None:
            fields["payment_details"] = details
        updated = (
            Order.objects
            .filter(order_id=order_id, payment_status=expected_current)
            .update(**fields)
        )
        return updated == 1
