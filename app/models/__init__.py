"""
Pure Python data models for Elektryk Pomocnik.

This package contains Qt-free data classes that represent placed symbols
and the schematic holding them.
"""

from .schematic import SchematicModel
from .symbol import NormalizationResult, ParameterMap, SymbolInstance, SymbolTemplate

__all__ = [
    "SchematicModel",
    "SymbolInstance",
    "SymbolTemplate",
    "NormalizationResult",
    "ParameterMap",
]
