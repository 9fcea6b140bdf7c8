"""Configuration constants for the Mesos HTTP API client."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def _parse_status_codes(env_var: str) -> tuple[int, ...]:
    """Parse a comma-separated list of status codes from the environment.

    Tokens that are not integers are dropped; range checks happen in
    ``config_validation``.
    """

    codes: list[int] = []
    for token in os.getenv(env_var, "").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            codes.append(int(token))
        except ValueError:
            continue
    return tuple(codes)


def _parse_log_file(env_var: str) -> Optional[Path]:
    value = os.getenv(env_var, "").strip()
    return Path(value) if value else None


# Extra codes (beyond 403) known to mean the event subscription was severed.
SUBSCRIPTION_LOSS_CODES: tuple[int, ...] = _parse_status_codes(
    "MESOSCLI_SUBSCRIPTION_LOSS_CODES"
)

LOG_FILE: Optional[Path] = _parse_log_file("MESOSCLI_LOG_FILE")
LOG_LEVEL: str = os.getenv("MESOSCLI_LOG_LEVEL", "INFO").strip().upper() or "INFO"
