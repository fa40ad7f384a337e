"""Settings validation."""

from __future__ import annotations

import dataclasses

import pytest

from ghtraq.config import Settings
from ghtraq.errors import ConfigError


class TestSettings:
    def test_valid_settings_pass(self, settings: Settings) -> None:
        assert settings.validate() is settings

    def test_webhook_url_joins_base_and_id(self, settings: Settings) -> None:
        assert settings.traq_webhook_url == "https://q.example.test/api/v3/webhooks/hook-123"

    @pytest.mark.parametrize("field", ["github_secret", "traq_secret", "traq_webhook_id"])
    def test_empty_secret_refuses(self, settings: Settings, field: str) -> None:
        broken = dataclasses.replace(settings, **{field: "  "})
        with pytest.raises(ConfigError, match=field.upper()):
            broken.validate()

    def test_bad_port_refuses(self, settings: Settings) -> None:
        with pytest.raises(ConfigError, match="PORT"):
            dataclasses.replace(settings, port=-1).validate()


class TestEntrypoint:
    def test_refuses_to_start_without_secrets(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from ghtraq import __main__ as entry

        started = []
        monkeypatch.setattr(entry, "settings", Settings(github_secret="", traq_secret="", traq_webhook_id=""))
        monkeypatch.setattr(entry.uvicorn, "run", lambda *a, **kw: started.append(a))
        assert entry.main() == 1
        assert started == []

    def test_starts_with_valid_settings(
        self, monkeypatch: pytest.MonkeyPatch, settings: Settings
    ) -> None:
        from ghtraq import __main__ as entry

        started = []
        monkeypatch.setattr(entry, "settings", settings)
        monkeypatch.setattr(entry.uvicorn, "run", lambda app, **kw: started.append(kw))
        assert entry.main() == 0
        assert started == [{"host": settings.host, "port": 8080}]
