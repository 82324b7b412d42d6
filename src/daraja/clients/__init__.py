"""
Client module for the Daraja STK Push API.

Provides an async HTTP client with access-token caching, and a factory that
lazily builds one client per environment.
"""

from .http_client import CachedToken, Daraja, DarajaClient

__all__ = ["CachedToken", "Daraja", "DarajaClient"]
