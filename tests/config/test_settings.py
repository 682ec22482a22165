from __future__ import annotations

import json

import pytest

from invoice_actions.config.settings import Settings


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    # no stray .env file
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings()
    assert settings.database_url == "sqlite:///invoices.db"
    assert settings.invoices_path == "/dashboard/invoices"
    assert settings.dashboard_path == "/dashboard"
    assert settings.users == {}


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVOICE_ACTIONS_DATABASE_URL", "postgresql://db/invoices")
    monkeypatch.setenv("INVOICE_ACTIONS_PORT", "9000")
    monkeypatch.setenv("INVOICE_ACTIONS_LOG_JSON", "true")
    monkeypatch.setenv("INVOICE_ACTIONS_USERS", json.dumps({"a@b.co": "scrypt$00$11"}))

    settings = Settings()

    assert settings.database_url == "postgresql://db/invoices"
    assert settings.port == 9000
    assert settings.log_json is True
    assert settings.users == {"a@b.co": "scrypt$00$11"}


def test_dotenv_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("INVOICE_ACTIONS_ROOT_PATH=/app\n", encoding="utf-8")
    assert Settings().root_path == "/app"


def test_init_kwargs_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVOICE_ACTIONS_VERBOSE", "false")
    assert Settings(verbose=True).verbose is True


def test_frozen() -> None:
    settings = Settings()
    with pytest.raises(Exception):
        settings.port = 1  # type: ignore[misc]
