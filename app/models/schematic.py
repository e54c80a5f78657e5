"""
SchematicModel - Central data store for placed symbols.

This module contains no Qt dependencies.
"""

from dataclasses import dataclass, field
from typing import Optional

from .symbol import SymbolInstance


@dataclass
class SchematicModel:
    """Ordered collection of symbols on the schematic, in z-order."""

    symbols: list[SymbolInstance] = field(default_factory=list)
    symbol_counter: int = 0

    def next_symbol_id(self) -> str:
        self.symbol_counter += 1
        return f"S{self.symbol_counter}"

    def add_symbol(self, symbol: SymbolInstance) -> None:
        self.symbols.append(symbol)

    def get_symbol(self, symbol_id: str) -> Optional[SymbolInstance]:
        for symbol in self.symbols:
            if symbol.symbol_id == symbol_id:
                return symbol
        return None

    def remove_symbol(self, symbol_id: str) -> Optional[SymbolInstance]:
        """Remove a symbol by ID and return it, or None if it was not found."""
        symbol = self.get_symbol(symbol_id)
        if symbol is not None:
            self.symbols.remove(symbol)
        return symbol

    def selected_symbols(self) -> list[SymbolInstance]:
        return [s for s in self.symbols if s.is_selected]

    def clear(self) -> None:
        self.symbols.clear()
        self.symbol_counter = 0

    def to_dict(self) -> dict:
        return {
            "symbols": [s.to_dict() for s in self.symbols],
            "counter": self.symbol_counter,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SchematicModel":
        symbols = [SymbolInstance.from_dict(s) for s in data.get("symbols", [])]
        # A stale stored counter must never reissue an id already in use
        counter = max(int(data.get("counter") or 0), _highest_symbol_number(symbols))
        return cls(symbols=symbols, symbol_counter=counter)


def _highest_symbol_number(symbols: list[SymbolInstance]) -> int:
    """Recover the id counter from ids like 'S12'."""
    highest = 0
    for symbol in symbols:
        suffix = symbol.symbol_id.lstrip("S")
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest
