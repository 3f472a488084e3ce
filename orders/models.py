from django.db import models

from .utils import generate_order_id, default_currency


class PaymentMethod(models.TextChoices):
    CASH_ON_DELIVERY = "CashOnDelivery", "Cash On Delivery"
    ONLINE_GATEWAY = "OnlineGateway", "Online Payment"


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    SUCCESS = "Success", "Success"
    FAILURE = "Failure", "Failure"
    CANCELLED = "Cancelled", "Cancelled"


class Order(models.Model):
    order_id = models.CharField(max_length=40, unique=True, db_index=True, default=generate_order_id)

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=8, default=default_currency)

    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH_ON_DELIVERY
    )
    payment_status = models.CharField(
        max_length=12, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    # written by the payments reconciler only
    payment_details = models.JSONField(blank=True, null=True)

    customer_name = models.CharField(max_length=128, blank=True, default="")
    customer_email = models.EmailField(blank=True, default="")
    customer_phone = models.CharField(max_length=20, blank=True, default="")
    billing_address = models.CharField(max_length=255, blank=True, default="")
    billing_country = models.CharField(max_length=2, blank=True, default="AE")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.SUCCESS

    def __str__(self):
        return f"{self.order_id} ({self.payment_status})"
