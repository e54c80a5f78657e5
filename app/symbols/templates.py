"""
symbols/templates.py

Loading symbol templates from disk, with an optional shared cache.
"""

import logging
import threading
from pathlib import Path
from typing import Union

from models.symbol import SymbolTemplate

from .constants import RASTER_EXTENSIONS, VECTOR_EXTENSIONS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_supported_template(path: PathLike) -> bool:
    suffix = Path(path).suffix.lower()
    return suffix in VECTOR_EXTENSIONS or suffix in RASTER_EXTENSIONS


def read_template(path: PathLike) -> SymbolTemplate:
    """Read a template file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If a vector template is not valid UTF-8.
        ValueError: If the file extension is not a supported template format.
    """
    path = Path(path)
    if not is_supported_template(path):
        raise ValueError(f"Unsupported template format: {path.suffix or path.name}")
    if path.suffix.lower() in VECTOR_EXTENSIONS:
        return SymbolTemplate(path=path, markup=path.read_text(encoding="utf-8"))
    return SymbolTemplate(path=path, data=path.read_bytes())


class TemplateCache:
    """Process-wide cache of loaded templates keyed by resolved path.

    Template files are treated as immutable while the application runs, so
    entries are never invalidated. Safe to share between threads.
    """

    def __init__(self):
        self._templates: dict[str, SymbolTemplate] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(path: PathLike) -> str:
        return str(Path(path).resolve())

    def get(self, path: PathLike) -> SymbolTemplate:
        """Return the cached template, reading it from disk on first use.

        Load errors propagate and nothing is cached for the failing path.
        """
        key = self._key(path)
        template = self._templates.get(key)
        if template is not None:
            return template

        template = read_template(path)
        with self._lock:
            # Another thread may have loaded it meanwhile; keep the first copy
            template = self._templates.setdefault(key, template)
        logger.debug("Cached template %s", key)
        return template

    def __contains__(self, path: PathLike) -> bool:
        return self._key(path) in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()
