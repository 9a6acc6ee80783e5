import logging
import re

from pythonjsonlogger.json import JsonFormatter

from .config import Settings

REDACTED = "[REDACTED_HASH]"


class PasswordHashRedactingFilter(logging.Filter):
    """Scrub credential material from the message and from `extra` fields."""

    _bcrypt_re = re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}")
    _argon_re = re.compile(r"\$argon2(?:id|i|d)\$[^\s'\"]+")
    _hex_re = re.compile(r"\b[0-9a-fA-F]{64}\b")
    # Record attributes that JsonFormatter would otherwise emit verbatim.
    sensitive_fields = ("password_hash", "password")

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self.sensitive_fields:
            if getattr(record, field, None) is not None:
                setattr(record, field, REDACTED)
        try:
            msg = record.getMessage()
        except Exception:
            return True
        for pattern in (self._bcrypt_re, self._argon_re, self._hex_re):
            msg = pattern.sub(REDACTED, msg)
        record.msg = msg
        record.args = ()
        return True


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(fmt=fmt) if settings.LOG_JSON else logging.Formatter(fmt=fmt))
    handler.addFilter(PasswordHashRedactingFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    # Engine echo would print bound parameters, including password hashes.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
