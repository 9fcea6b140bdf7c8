from __future__ import annotations

import logging

from . import config
from .codes import Code
from .logging_utils import _httpcli_event
from .utils import log_line


def _raise_config_error(message: str, *, error: str, **fields: object) -> None:
    _httpcli_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        **fields,
    )
    log_line(f"[CONFIG] {message}")
    raise ValueError(message)


def validate_runtime_config() -> None:
    """Validate the client configuration.

    Raises ``ValueError`` when a configured subscription-loss code could never
    classify as an error, or when the log level is not a known level name.
    """

    for code in config.SUBSCRIPTION_LOSS_CODES:
        if not Code(code).is_error():
            _raise_config_error(
                f"MESOSCLI_SUBSCRIPTION_LOSS_CODES contains {code}, which is not an HTTP error status.",
                error="subscription_loss_code_not_error",
                value=code,
            )

    if not isinstance(logging.getLevelName(config.LOG_LEVEL), int):
        _raise_config_error(
            f"MESOSCLI_LOG_LEVEL={config.LOG_LEVEL!r} is not a logging level.",
            error="invalid_log_level",
            value=config.LOG_LEVEL,
        )


__all__ = ["validate_runtime_config"]
