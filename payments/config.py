"""Gateway configuration passed explicitly into the payment services."""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class GatewayConfig:
    merchant_id: str
    access_code: str
    working_key: str
    payment_url: str
    callback_url: str = ""
    cancel_url: str = ""
    frontend_url: str = "http://localhost:3000"
    language: str = "EN"

    @classmethod
    def from_settings(cls) -> "GatewayConfig":
        conf = getattr(settings, "CCAVENUE", None) or {}
        return cls(
            merchant_id=conf.get("MERCHANT_ID", ""),
            access_code=conf.get("ACCESS_CODE", ""),
            working_key=conf.get("WORKING_KEY", ""),
            payment_url=conf.get("PAYMENT_URL", ""),
            callback_url=conf.get("CALLBACK_URL", ""),
            cancel_url=conf.get("CANCEL_URL", ""),
            frontend_url=conf.get("FRONTEND_URL") or "http://localhost:3000",
            language=conf.get("LANGUAGE") or "EN",
        )
