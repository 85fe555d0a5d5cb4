"""Tests for findash.config."""

import stat
from decimal import Decimal
from pathlib import Path

from findash.config import (
    create_default_config,
    load_config,
    load_settings,
    save_config,
    settings_from_config,
)


class TestLoadSettings:
    """Tests for load_settings and settings_from_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to defaults when there is no config file."""
        settings = load_settings(tmp_path / "missing.toml")

        assert settings.user_id == "local"
        assert settings.currency == "BRL"
        assert settings.history_months == 4
        assert settings.simulator.conservative_rate_percent == Decimal("0.5")
        assert settings.simulator.sample_step_months == 6

    def test_partial_override(self) -> None:
        """Should merge a partial config over the defaults."""
        settings = settings_from_config(
            {"currency": "GBP", "dashboard": {"history_months": 6}, "simulator": {"annual_rate_percent": 10.5}}
        )

        assert settings.currency == "GBP"
        assert settings.locale == "pt-BR"
        assert settings.history_months == 6
        assert settings.recent_transactions == 5
        assert settings.simulator.annual_rate_percent == Decimal("10.5")
        assert settings.simulator.horizon_months == 120

    def test_round_trip(self, tmp_path: Path) -> None:
        """Should read back what was saved."""
        path = tmp_path / "findash" / "config.toml"
        save_config({"user_id": "alice", "locale": "en"}, path)

        assert load_config(path) == {"user_id": "alice", "locale": "en"}
        settings = load_settings(path)
        assert settings.user_id == "alice"
        assert settings.locale == "en"


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_creates_private_file(self, tmp_path: Path) -> None:
        """Should write the defaults with 0600 permissions."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_config(path)["simulator"]["horizon_months"] == 120
