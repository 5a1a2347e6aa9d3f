"""Backend factory functions."""

import os
from typing import Optional

from contable.backend.http_backend import HttpBackend

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 10.0


def create_http_backend(
    base_url: Optional[str] = None, timeout: Optional[float] = None
) -> HttpBackend:
    """Create an HTTP backend instance.

    Args:
        base_url: Backend base URL. If None, checks CONTABLE_API_BASE_URL
            environment variable, then defaults to DEFAULT_API_BASE_URL
        timeout: Request timeout in seconds. If None, checks
            CONTABLE_API_TIMEOUT, then defaults to DEFAULT_TIMEOUT

    Returns:
        HttpBackend instance
    """
    if base_url is None:
        base_url = os.environ.get("CONTABLE_API_BASE_URL") or DEFAULT_API_BASE_URL

    if timeout is None:
        env_timeout = os.environ.get("CONTABLE_API_TIMEOUT")
        timeout = float(env_timeout) if env_timeout else DEFAULT_TIMEOUT

    return HttpBackend(base_url, timeout=timeout)
