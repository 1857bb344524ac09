"""Shared-secret admin password check."""
import hmac
from typing import Optional

from hackboard.config import Settings, get_settings


def verify_password(candidate: Optional[str], settings: Optional[Settings] = None) -> bool:
    """True when ``candidate`` matches ADMIN_PASSWORD. Always False if none is configured."""
    settings = settings or get_settings()
    if not candidate or settings.ADMIN_PASSWORD is None:
        return False
    expected = settings.ADMIN_PASSWORD.get_secret_value()
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
