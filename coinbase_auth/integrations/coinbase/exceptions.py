"""Exceptions raised by the Coinbase API client."""

from typing import Optional


class CoinbaseAPIError(Exception):
    """Raised when the Coinbase API cannot be reached or returns an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


__all__ = ["CoinbaseAPIError"]
