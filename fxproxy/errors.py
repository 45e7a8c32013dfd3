from __future__ import annotations


class FxProxyError(RuntimeError):
    """Base for every classified failure. `code` and `status_code` drive the JSON error body."""
    code = "SERVER_ERROR"
    status_code = 500


class MissingParameter(FxProxyError):
    code = "MISSING_PAIR"
    status_code = 400

    def __init__(self, message: str = "Pair parameter is required"):
        super().__init__(message)


class RateLimitError(FxProxyError):
    code = "API_LIMIT_REACHED"
    status_code = 429

    def __init__(self, provider: str = "Upstream"):
        self.provider = provider
        super().__init__(f"{provider} API limit reached. Please try again later or enable DEMO_MODE.")


class TransportError(FxProxyError):
    pass


class ProviderError(FxProxyError):
    pass


class NoDataError(FxProxyError):
    pass


class ParseError(FxProxyError):
    pass


class MissingApiKeyError(FxProxyError):
    pass
