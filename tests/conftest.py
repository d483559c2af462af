"""Shared fixtures."""

import pytest

_ENV_VARS = (
    "SPENDSIGHT_SERVICE_URL",
    "SPENDSIGHT_TIMEOUT",
    "SPENDSIGHT_OFFLINE",
    "SPENDSIGHT_SEED",
    "SPENDSIGHT_HISTORY_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
