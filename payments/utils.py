import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ORDER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,40}$")


def is_valid_order_id(order_id) -> bool:
    return isinstance(order_id, str) and bool(ORDER_ID_RE.match(order_id))


def format_amount(amount) -> str:
    q = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return format(q, "f")


def parse_amount(raw) -> Decimal | None:
    """Gateway amounts arrive as strings; return None when unparseable."""
    if raw in (None, ""):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None
