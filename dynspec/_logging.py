import hashlib
import logging
from typing import Any

# Library logger; applications attach their own handlers
logger = logging.getLogger("dynspec")

# Silence "No handlers could be found" when the application configures nothing
logger.addHandler(logging.NullHandler())


def redact_key(key: dict[str, Any] | str | None) -> str:
    """
    Redacts a scan cursor (or a single key value) for logging.
    Values are hashed so two log lines about the same cursor still correlate.
    """
    if key is None:
        return "<none>"
    try:
        if isinstance(key, dict):
            redacted = {}
            for name in sorted(key):
                digest = hashlib.sha256(str(key[name]).encode("utf-8")).hexdigest()
                redacted[name] = digest[:8]
            return str(redacted)
        return hashlib.sha256(str(key).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
