"""
Persisted normalizer settings.

Values live in QSettings under the "symbols/" group. Missing or malformed
entries fall back to the NormalizerSettings defaults.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QSettings
from symbols.constants import NormalizerSettings

logger = logging.getLogger(__name__)

SETTINGS_ORGANIZATION = "Elektryk"
SETTINGS_APPLICATION = "Elektryk Pomocnik"
SETTINGS_GROUP = "symbols"

_FIELDS = ("scale_factor", "crop_threshold", "min_body_size", "default_width", "default_height")


def _settings(settings: Optional[QSettings]) -> QSettings:
    return settings if settings is not None else QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)


def load_normalizer_settings(settings: Optional[QSettings] = None) -> NormalizerSettings:
    """Read normalizer settings, using defaults for anything missing."""
    settings = _settings(settings)
    defaults = NormalizerSettings().to_dict()
    values = {}
    for name in _FIELDS:
        raw = settings.value(f"{SETTINGS_GROUP}/{name}", defaults[name])
        try:
            values[name] = float(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid setting %s/%s=%r", SETTINGS_GROUP, name, raw)
            values[name] = defaults[name]
    return NormalizerSettings.from_dict(values)


def save_normalizer_settings(normalizer_settings: NormalizerSettings,
                             settings: Optional[QSettings] = None) -> None:
    settings = _settings(settings)
    for name, value in normalizer_settings.to_dict().items():
        settings.setValue(f"{SETTINGS_GROUP}/{name}", value)
    settings.sync()


def reset_normalizer_settings(settings: Optional[QSettings] = None) -> None:
    """Remove stored values so the defaults apply again."""
    settings = _settings(settings)
    settings.remove(SETTINGS_GROUP)
    settings.sync()
