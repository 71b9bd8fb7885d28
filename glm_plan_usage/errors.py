"""Error types raised while building the client and fetching usage."""


class GlmUsageError(Exception):
    """Base exception for glm-plan-usage."""


class ConfigError(GlmUsageError):
    """Client cannot be built from the environment. Never retried."""


class MissingCredentialError(ConfigError):
    def __init__(self, var: str):
        super().__init__(f"Missing environment variable: {var}")
        self.var = var


class UnknownPlatformError(ConfigError):
    def __init__(self, base_url: str):
        super().__init__(f"Platform detection failed for base url: {base_url}")
        self.base_url = base_url


class InvalidCredentialError(ConfigError):
    def __init__(self, var: str):
        super().__init__(f"Environment variable {var} is not a valid header value")
        self.var = var


class InvalidBaseUrlError(ConfigError):
    def __init__(self, base_url: str, reason: str):
        super().__init__(f"Invalid base url {base_url!r}: {reason}")
        self.base_url = base_url


class FetchError(GlmUsageError):
    """A single fetch attempt failed. Subject to retry."""


class TransportError(FetchError):
    """Connection failure or timeout."""


class ApiError(FetchError):
    """The API answered, but not with usable data."""


class UnexpectedStatusError(ApiError):
    def __init__(self, status_code: int, text: str):
        super().__init__(f"Status {status_code}: {text}")
        self.status_code = status_code
        self.text = text


class MalformedResponseError(ApiError):
    pass


class ServerRejectedError(ApiError):
    def __init__(self, message: str):
        super().__init__(f"API returned error: {message}")
        self.message = message


class ConfigFileError(GlmUsageError):
    """Config file exists but cannot be read or parsed."""
