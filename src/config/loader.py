"""YAML app manifest loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
#   1. config/config.yaml: Declarative manifest checked into the repo
#                        (dev server port, CORS origin, enabled providers)
#   2. .env file         : Local developer overrides (not committed)
#   3. Environment vars  : Set at deploy time
#
# load_config() reads the YAML first, then deep-merges the values from
# Settings on top.  Provider credentials are NOT merged here; they stay
# in Settings.server_env() and go through the credential resolver.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load the YAML manifest and merge it with environment-based Settings.

    Args:
        path: Path to the YAML manifest.
        settings: Settings to merge; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the file exists but is not a YAML mapping.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping at top level")
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
            "origin": settings.app_origin,
        },
        "http": {
            "timeout": settings.http_timeout,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def enabled_providers(config: dict) -> list[str] | None:
    """Return the provider names listed in the manifest, or ``None`` for "all"."""
    providers = config.get("providers", {}).get("enabled")
    if providers is None:
        return None
    if not isinstance(providers, list):
        raise ConfigurationError("providers.enabled must be a list of provider names")
    return [str(name) for name in providers]


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
