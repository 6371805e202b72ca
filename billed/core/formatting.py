"""Display and form-input helpers shared by the controllers and views."""

import re

from billed.core.models import BillStatus

STATUS_LABELS = {
    BillStatus.PENDING: "En attente",
    BillStatus.ACCEPTED: "Accepté",
    BillStatus.REFUSED: "Refused",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def format_status(status: BillStatus | str) -> str:
    """Return the label shown for a bill status, falling back to the raw value."""
    try:
        return STATUS_LABELS[BillStatus(status)]
    except ValueError:
        return str(status)


def parse_int(value: object, default: int | None = None) -> int | None:
    """Parse the leading integer of a form value ("300" -> 300, "12.5" -> 12), or return default."""
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))
