from django.urls import path
from . import views
app_name = "payments"
urlpatterns = [
    path("initiate", views.initiate_payment_view, name="initiate"),
    path("callback", views.payment_callback_view, name="callback"),
    path("cancel", views.payment_cancel_view, name="cancel"),
    path("status/<str:order_id>", views.payment_status_view, name="status"),
]
