"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads each field from (highest priority first):
#
#   1. Environment variables, matched case-insensitively, so both
#      HUGGINGFACE_API_KEY and HuggingFace_API_KEY fill huggingface_api_key
#   2. The .env file in the working directory
#   3. The defaults below
#
# Provider adapters never read Settings directly for credentials.  They
# receive the mapping from server_env(), keyed by the exact variable
# names each provider declares, and run it through the credential
# resolver alongside call-time keys and stored provider settings.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """modelgate application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Providers ===
    # Empty string = "not configured"; the resolver treats it as absent.
    huggingface_api_key: str = ""
    lmstudio_api_key: str = ""
    lmstudio_api_base_url: str = ""

    # === HTTP ===
    http_timeout: float = 60.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 5173
    app_env: str = "development"
    # Browser origin of the chat UI; sent to LM Studio as the CORS allow-origin.
    app_origin: str = "http://localhost:5173"
    log_level: str = "INFO"

    def server_env(self) -> dict[str, str]:
        """Return the provider environment mapping read by the credential resolver.

        Only non-empty values are included.
        """
        env = {
            "HuggingFace_API_KEY": self.huggingface_api_key,
            "LMSTUDIO_API_KEY": self.lmstudio_api_key,
            "LMSTUDIO_API_BASE_URL": self.lmstudio_api_base_url,
        }
        return {key: value for key, value in env.items() if value}

    def get_configured_providers(self) -> list[str]:
        """Return provider names that have an API key configured."""
        providers: list[str] = []
        if self.huggingface_api_key:
            providers.append("HuggingFace")
        if self.lmstudio_api_key:
            providers.append("LMStudio")
        return providers
