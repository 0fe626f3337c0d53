"""HTTP adapter – async HTTP client wrappers."""
from ub_dashboard.adapters.http.client import HttpClient, HttpxHttpClient
from ub_dashboard.adapters.http.retry_client import RetryingHttpClient

__all__ = ["HttpClient", "HttpxHttpClient", "RetryingHttpClient"]
