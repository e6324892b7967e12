"""Custom exception hierarchy for modelgate.

All application exceptions inherit from :class:`ModelGateError`, which
carries an optional ``provider_name`` so error handlers can tell which
backend (e.g. "HuggingFace", "LMStudio") caused the failure.

    ModelGateError  (base -- catch-all for any modelgate error)
    +-- UnknownModelError               (model not in the provider catalog)
    +-- UnknownProviderError            (no provider registered under a name)
    +-- MissingCredentialError          (no API key could be resolved)
    +-- InferenceRequestError           (provider HTTP call failed)
    +-- DynamicListingUnavailableError  (live catalog fetch failed)
    +-- ConfigurationError              (startup / invalid config)

``DynamicListingUnavailableError`` never reaches callers: providers raise
it internally, log it, and degrade to an empty catalog.
"""


class ModelGateError(Exception):
    """Base exception for all modelgate errors.

    The ``__str__`` method prefixes the provider name in brackets for log
    scanning, e.g. ``[HuggingFace] Missing API key``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------

class UnknownModelError(ModelGateError):
    """Raised when a requested model is absent from the provider's catalog."""

    def __init__(
        self,
        message: str = "Model not supported or not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnknownProviderError(ModelGateError):
    """Raised when no provider is registered under the requested name."""

    def __init__(
        self,
        message: str = "Provider not registered",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Credential / provider-call errors
# ---------------------------------------------------------------------------

class MissingCredentialError(ModelGateError):
    """Raised before any network call when no API key is resolvable."""

    def __init__(
        self,
        message: str = "Missing API key",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InferenceRequestError(ModelGateError):
    """Raised when a provider inference call fails.

    The message is deliberately generic; the raw provider response and
    transport details are logged server-side and never attached here.
    """

    def __init__(
        self,
        message: str = "An error occurred while calling the provider",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class DynamicListingUnavailableError(ModelGateError):
    """Raised internally when a live model listing cannot be fetched or parsed."""

    def __init__(
        self,
        message: str = "Dynamic model listing unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(ModelGateError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
