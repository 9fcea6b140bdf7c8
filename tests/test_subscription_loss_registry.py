from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from mesoscli.httpcli import apierrors, codes, config


@pytest.fixture(autouse=True)
def _isolated_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(apierrors, "_SUBSCRIPTION_LOSS_CODES", {codes.CODE_UNSUBSCRIBED})
    monkeypatch.setattr(apierrors, "_httpcli_event", lambda *_, **__: None)


def test_concurrent_registration_and_lookup() -> None:
    errors = [apierrors.new_error(status) for status in range(500, 540)]

    def _register(status: int) -> None:
        apierrors.add_subscription_loss_code(status)

    def _probe(err: apierrors.APIError) -> bool:
        return err.subscription_loss()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_register, range(500, 540)))
        list(pool.map(_probe, errors))

    assert all(err.subscription_loss() for err in errors)
    assert apierrors.subscription_loss_codes() == frozenset({403, *range(500, 540)})


def test_register_configured_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "SUBSCRIPTION_LOSS_CODES", (401, 410))

    registered = apierrors.register_configured_subscription_loss_codes()

    assert registered == frozenset({403, 401, 410})
    assert apierrors.new_error(410).subscription_loss() is True
    assert apierrors.new_error(404).subscription_loss() is False


def test_register_configured_codes_rejects_non_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "SUBSCRIPTION_LOSS_CODES", (410, 204))
    monkeypatch.setattr("mesoscli.httpcli.config_validation._httpcli_event", lambda *_, **__: None)
    monkeypatch.setattr("mesoscli.httpcli.config_validation.log_line", lambda _msg: None)

    with pytest.raises(ValueError):
        apierrors.register_configured_subscription_loss_codes()

    assert apierrors.subscription_loss_codes() == frozenset({403})


def test_snapshot_is_detached() -> None:
    snapshot = apierrors.subscription_loss_codes()
    apierrors.add_subscription_loss_code(502)
    assert 502 not in snapshot
    assert 502 in apierrors.subscription_loss_codes()
