"""Security helpers: PII masking for log lines."""
import re

_LONG_DIGITS = re.compile(r"\b\d{10,}\b")


def mask_pii(text: str) -> str:
    # Card, account and phone numbers are all long digit runs
    if not text:
        return ""
    return _LONG_DIGITS.sub("[REDACTED]", text)


def preview(text: str, limit: int = 80) -> str:
    """Masked, single-line excerpt of a user message for logging."""
    masked = " ".join(mask_pii(text).split())
    if len(masked) > limit:
        return masked[:limit] + "..."
    return masked
