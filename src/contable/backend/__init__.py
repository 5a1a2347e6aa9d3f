"""Backend access layer for contable."""

from contable.backend.base import Backend
from contable.backend.factories import create_http_backend

__all__ = ["Backend", "create_http_backend"]
