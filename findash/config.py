"""Configuration file management for findash."""

import os
import tomllib
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "user_id": "local",
    "currency": "BRL",
    "locale": "pt-BR",
    "dashboard": {
        "history_months": 4,
        "recent_transactions": 5,
    },
    "simulator": {
        "initial_amount": 1000,
        "monthly_contribution": 500,
        "annual_rate_percent": 8,
        "horizon_months": 120,
        "conservative_rate_percent": 0.5,
        "sample_step_months": 6,
    },
}


@dataclass(frozen=True)
class SimulatorDefaults:
    """Starting parameters for the simulate command."""

    initial_amount: Decimal
    monthly_contribution: Decimal
    annual_rate_percent: Decimal
    horizon_months: int
    conservative_rate_percent: Decimal
    sample_step_months: int


@dataclass(frozen=True)
class Settings:
    """Resolved configuration with defaults applied."""

    user_id: str
    currency: str
    locale: str
    history_months: int
    recent_transactions: int
    simulator: SimulatorDefaults


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "findash" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(DEFAULT_CONFIG, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _decimal(value: Any) -> Decimal:
    # str() first so TOML floats such as 0.5 become Decimal("0.5"), not the binary expansion
    return Decimal(str(value))


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Merge a configuration dictionary over the defaults.

    Args:
        config: Parsed TOML, possibly partial.

    Returns:
        Settings with every field resolved.
    """
    dashboard = {**DEFAULT_CONFIG["dashboard"], **config.get("dashboard", {})}
    simulator = {**DEFAULT_CONFIG["simulator"], **config.get("simulator", {})}

    return Settings(
        user_id=str(config.get("user_id", DEFAULT_CONFIG["user_id"])),
        currency=str(config.get("currency", DEFAULT_CONFIG["currency"])),
        locale=str(config.get("locale", DEFAULT_CONFIG["locale"])),
        history_months=int(dashboard["history_months"]),
        recent_transactions=int(dashboard["recent_transactions"]),
        simulator=SimulatorDefaults(
            initial_amount=_decimal(simulator["initial_amount"]),
            monthly_contribution=_decimal(simulator["monthly_contribution"]),
            annual_rate_percent=_decimal(simulator["annual_rate_percent"]),
            horizon_months=int(simulator["horizon_months"]),
            conservative_rate_percent=_decimal(simulator["conservative_rate_percent"]),
            sample_step_months=int(simulator["sample_step_months"]),
        ),
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return settings_from_config(config)
