import random
import string
from datetime import datetime, timezone

from django.conf import settings

ID_ALPHABET = string.ascii_uppercase + string.digits

# generated ids stay well inside the 40 characters payments.utils.ORDER_ID_RE allows
MAX_GENERATED_ID_LENGTH = 20


def generate_order_id(prefix="ORD"):
    """Prefix, UTC month-to-second stamp and a random tail, trimmed from the left."""
    stamp = datetime.now(timezone.utc).strftime("%m%d%H%M%S")
    tail = "".join(random.choices(ID_ALPHABET, k=6))
    return f"{prefix}{stamp}{tail}"[-MAX_GENERATED_ID_LENGTH:]


def default_currency():
    return (getattr(settings, "CCAVENUE", None) or {}).get("CURRENCY") or "AED"
