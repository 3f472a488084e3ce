from django.contrib import admin
from .models import Order

@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_id", "payment_status", "payment_method", "amount", "currency", "created_at", "updated_at")
    search_fields = ("order_id", "customer_email", "customer_phone")
    list_filter = ("payment_status", "payment_method", "currency", "created_at")
    # payment state belongs to the gateway reconciliation flow
    readonly_fields = ("payment_status", "payment_details", "created_at", "updated_at")
    ordering = ("-created_at",)
