from __future__ import annotations

from typing import Any

from .utils import log_line


def _httpcli_event(label: str = "", *, phase: str | None = None, **fields: Any) -> None:
    """Emit a ``[HTTPCLI][LABEL] k=v`` line for classification and registry events."""

    try:
        phase_label = label or (phase or "")
        if phase and label:
            fields.setdefault("phase", phase)
        payload = ", ".join(f"{k}={repr(v)}" for k, v in sorted(fields.items()))
        log_line(f"[HTTPCLI][{phase_label.upper()}] {payload}")
    except Exception:
        # Never let logging break classification.
        return


__all__ = ["_httpcli_event"]
