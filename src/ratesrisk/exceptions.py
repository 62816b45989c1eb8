"""
Exceptions raised by the risk engine and its models.

Missing market data is not an error: engine queries return None for it.
These exceptions cover the cases that are fatal or that indicate a
programming error on the caller's side.
"""

from typing import Optional


class FeedNotFoundError(FileNotFoundError):
    """A market-data or trade feed could not be opened."""
    
    def __init__(self, path: str, feed: Optional[str] = None):
        self.path = path
        self.feed = feed
        label = f"{feed} feed" if feed else "Feed"
        super().__init__(f"{label} could not be read at {path}")


class TenorNotFoundError(KeyError):
    """A bump was requested at a tenor the curve does not hold."""
    
    def __init__(self, tenor: int, currency: Optional[str] = None):
        self.tenor = tenor
        self.currency = currency
        where = f" for {currency}" if currency else ""
        super().__init__(f"No rate at tenor {tenor} days{where}")


__all__ = [
    "FeedNotFoundError",
    "TenorNotFoundError",
]
