"""WhatsApp number normalization.

Client numbers are stored in one canonical international form so that
``0981 123-456``, ``+595 981 123456`` and ``5950981123456`` all resolve to
the same client.
"""

import re

COUNTRY_CODE = "595"

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_whatsapp(raw: object) -> str:
    """Return the canonical digits-only form of a contact number.

    - strips every non-digit character
    - ``09xxxxxxxx`` (local mobile format) becomes ``5959xxxxxxxx``
    - ``5950xxxxxxx`` (country code plus trunk zero) becomes ``595xxxxxxx``
    - anything else passes through as digits

    Never raises; malformed input degrades to whatever digits remain.
    The trunk-zero collapse repeats so the function is idempotent.
    """
    if raw is None or raw == "":
        return ""

    normalized = _NON_DIGITS.sub("", str(raw))

    if normalized.startswith("09"):
        normalized = COUNTRY_CODE + normalized[1:]

    while normalized.startswith(COUNTRY_CODE + "0"):
        normalized = COUNTRY_CODE + normalized[len(COUNTRY_CODE) + 1:]

    return normalized
