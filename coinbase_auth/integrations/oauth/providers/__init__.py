"""OAuth2 strategy implementations."""

from .coinbase import CoinbaseConfig, CoinbaseStrategy

__all__ = ["CoinbaseConfig", "CoinbaseStrategy"]
