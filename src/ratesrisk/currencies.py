"""
Currency universes.

A CurrencySet is an ordered, closed set of currency codes. Currencies are
plain 3-letter strings; the set decides which codes are valid and orders
them by declaration order. Universes are injected into the engine through
EngineConfig, so a wider group is just another CurrencySet:
    
    G10 = G5.extend(["AUD", "NZD", "CHF", "SEK", "NOK"])
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


class CurrencySet:
    """
    Ordered enumeration of supported currency codes.
    
    Attributes:
        name: Label of the universe (e.g. "G5")
        codes: Currency codes in declaration order
    """
    
    def __init__(self, codes: Sequence[str], name: str = "custom"):
        normalized = tuple(str(c).strip().upper() for c in codes)
        if not normalized:
            raise ValueError("A currency set needs at least one currency")
        for code in normalized:
            if len(code) != 3 or not code.isalpha():
                raise ValueError(f"Invalid currency code: {code!r}")
        if len(set(normalized)) != len(normalized):
            raise ValueError(f"Duplicate currency codes in {normalized}")
        
        self.name = name
        self.codes: Tuple[str, ...] = normalized
        self._index = {code: i for i, code in enumerate(normalized)}
    
    def to_ccy(self, code: str) -> Optional[str]:
        """
        Convert a string to a member currency.
        
        Matching is exact: feeds carry upper-case codes and anything else
        is treated as unknown.
        
        Returns:
            The currency code, or None if it is not in the set
        """
        return code if code in self._index else None
    
    @staticmethod
    def to_string(ccy: str) -> str:
        """String form of a currency."""
        return ccy
    
    def index(self, ccy: str) -> int:
        """Declaration position of a currency (raises KeyError if unknown)."""
        return self._index[ccy]
    
    def sort(self, currencies: Iterable[str]) -> List[str]:
        """Sort member currencies by declaration order."""
        return sorted(currencies, key=self.index)
    
    def extend(self, codes: Sequence[str], name: Optional[str] = None) -> "CurrencySet":
        """Create a wider universe that keeps this one's order as a prefix."""
        return CurrencySet(self.codes + tuple(codes), name=name or f"{self.name}+")
    
    def __contains__(self, ccy: object) -> bool:
        return ccy in self._index
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.codes)
    
    def __len__(self) -> int:
        return len(self.codes)
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurrencySet):
            return NotImplemented
        return self.codes == other.codes
    
    def __hash__(self) -> int:
        return hash(self.codes)
    
    def __repr__(self) -> str:
        return f"CurrencySet(name={self.name!r}, codes={list(self.codes)})"


G5 = CurrencySet(["EUR", "GBP", "USD", "CAD", "JPY"], name="G5")
G10 = G5.extend(["AUD", "NZD", "CHF", "SEK", "NOK"], name="G10")


__all__ = [
    "CurrencySet",
    "G5",
    "G10",
]
