"""Wealth Ranker: rank a fortune against every country's local-currency thresholds."""

__version__ = "1.0.0"
