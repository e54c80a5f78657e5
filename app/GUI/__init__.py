from .symbol_renderer import QtRenderBackend

__all__ = [
    'QtRenderBackend',
]
