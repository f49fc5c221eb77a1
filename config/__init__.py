"""Central configuration for the CNIS contribution-time toolkit.

Values are read from the environment once at import time (after loading a
``.env`` file when present). Modules read them through ``config.<NAME>`` at
call time so tests can monkeypatch a single attribute.

``CNIS_HEADER_CHAR_LIMIT`` caps the header region of a bond block when no
remuneration section title is found. ``CNIS_DEFAULT_GENDER`` (``M`` | ``F``)
selects the multiplier column when the subject's gender is unknown.
"""

import os
import warnings

from dotenv import load_dotenv

load_dotenv()


_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_GENDER_VALUES: tuple[str, ...] = ("M", "F")
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_int_env(value: object | None, *, env_var: str, default: int) -> int:
    """Return a positive integer parsed from ``value`` or ``default``."""

    if value is None:
        return default
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return default
        try:
            parsed = int(float(candidate))
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return default
    elif isinstance(value, (int, float)):
        parsed = int(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using %s." % (env_var, value, default),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        warnings.warn(
            "%s must be positive; using %s." % (env_var, default),
            RuntimeWarning,
        )
        return default
    return parsed


def normalise_gender(value: object | None, *, default: str = "M") -> str:
    """Return ``M`` or ``F`` for ``value`` or ``default`` when invalid."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().upper()[:1]
    if not candidate:
        return default
    if candidate in _GENDER_VALUES:
        return candidate
    warnings.warn(
        "Unsupported CNIS_DEFAULT_GENDER '%s'; falling back to '%s'." % (value, default),
        RuntimeWarning,
    )
    return default


def normalise_log_level(value: object | None, *, default: str = "INFO") -> str:
    """Return a supported logging level name or ``default``."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().upper()
    if candidate in _LOG_LEVELS:
        return candidate
    if candidate:
        warnings.warn(
            "Unsupported LOG_LEVEL '%s'; falling back to '%s'." % (value, default),
            RuntimeWarning,
        )
    return default


CNIS_HEADER_CHAR_LIMIT = _parse_positive_int_env(
    os.getenv("CNIS_HEADER_CHAR_LIMIT"), env_var="CNIS_HEADER_CHAR_LIMIT", default=500
)
CNIS_DEFAULT_GENDER = normalise_gender(os.getenv("CNIS_DEFAULT_GENDER"))
CNIS_MAX_FILE_MB = _parse_positive_int_env(
    os.getenv("CNIS_MAX_FILE_MB"), env_var="CNIS_MAX_FILE_MB", default=20
)
CNIS_OCR_ENABLED = _is_truthy_flag(os.getenv("CNIS_OCR_ENABLED", "1"))
LOG_LEVEL = normalise_log_level(os.getenv("LOG_LEVEL"))


def max_file_bytes() -> int:
    """Return the upload size limit in bytes."""

    return CNIS_MAX_FILE_MB * 1024 * 1024


__all__ = [
    "CNIS_DEFAULT_GENDER",
    "CNIS_HEADER_CHAR_LIMIT",
    "CNIS_MAX_FILE_MB",
    "CNIS_OCR_ENABLED",
    "LOG_LEVEL",
    "max_file_bytes",
    "normalise_gender",
    "normalise_log_level",
]
