import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)


def parse_sample_rate(env_var: str, default: float = 0.0) -> float:
    """Read a Sentry sample rate, falling back to ``default`` on bad input.

    Rates above 1.0 are clamped since Sentry treats them as "always sample".
    """

    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return default

    try:
        rate = float(raw)
    except ValueError:
        logger.warning(
            "%s is not a valid float (got %r); using %.2f", env_var, raw, default
        )
        return default

    if rate < 0:
        logger.warning("%s cannot be negative; using %.2f", env_var, default)
        return default
    if rate > 1:
        logger.warning("%s above 1.0 (got %s); clamping to 1.0", env_var, raw)
        return 1.0
    return rate


def init_sentry() -> bool:
    """Initialise Sentry from ``SENTRY_*`` variables; return whether it is on."""

    dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not dsn:
        logger.info("SENTRY_DSN not set; error reporting disabled")
        return False

    options = {
        "dsn": dsn,
        "integrations": [FastApiIntegration()],
        "traces_sample_rate": parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE"),
        "profiles_sample_rate": parse_sample_rate("SENTRY_PROFILES_SAMPLE_RATE"),
        "send_default_pii": False,
    }
    for key in ("environment", "release"):
        value = (os.getenv(f"SENTRY_{key.upper()}") or "").strip()
        if value:
            options[key] = value

    sentry_sdk.init(**options)
    logger.info(
        "Sentry enabled (environment=%s, release=%s)",
        options.get("environment", "-"),
        options.get("release", "-"),
    )
    return True
