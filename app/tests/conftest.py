"""
Shared test fixtures for the symbol engine test suite.

Template fixtures are written to tmp_path; the fake render backend records
what it was asked to draw instead of drawing it (no Qt dependencies).
"""

import os
import sys
from pathlib import Path

# Run Qt headless so the pytest-qt qapp fixture works without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure app/ is on sys.path so bare imports (models, symbols, controllers, GUI)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from symbols.rendering import RasterImage, RenderBackend

# Body rect at (10, 10, 200, 100), no outer translate
SIMPLE_SVG = """\
<?xml version="1.0" encoding="utf-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="300" height="200" viewBox="0 0 300 200">
  <rect id="Page-1" x="0" y="0" width="300" height="200" fill="white"/>
  <rect x="10" y="10" width="200" height="100" style="fill:#ffffff;stroke:#000000"/>
  <rect x="20" y="20" width="5" height="5" style="fill:#000000"/>
  <text x="30" y="50">{{LABEL}}</text>
  <text x="30" y="70">{{CURRENT}}</text>
</svg>
"""

# Body rect shifted by an outer translate group
TRANSLATED_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 400 400">
  <g transform="translate(-1600, -20)">
    <rect x="1650" y="40" width="120" height="300" style="fill:#eeeeee"/>
    <g transform="translate(5 5)">
      <rect x="0" y="0" width="20" height="20" style="fill:#000"/>
    </g>
  </g>
</svg>
"""

# Body rect deep inside a transform stack the normalizer cannot resolve
FAR_AWAY_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 50 60">
  <rect x="900" y="900" width="50" height="50" style="fill:#cccccc"/>
</svg>
"""

DISTRIBUTION_BLOCK_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1010 880">
  <rect x="0" y="0" width="1000" height="800" style="fill:#dddddd"/>
  <path id="osłona-niebieska" d="M0 0 H100 V100 Z" style="fill:#0000ff"/>
  <g id="danger" display="none"><path d="M0 0 L10 10"/></g>
  <text x="10" y="850" style="font-size:40px"><tspan>B</tspan><tspan>lok rozdzielczy</tspan></text>
  <text x="10" y="870">{{CURRENT}}</text>
</svg>
"""


class FakeRenderBackend(RenderBackend):
    """Records render requests and returns a tuple describing them."""

    def __init__(self, raster_size=(64.0, 32.0)):
        self.markup_calls = []
        self.raster_calls = []
        self.raster_size = raster_size

    def render_markup(self, markup, width, height):
        self.markup_calls.append((markup, width, height))
        return ("svg", width, height)

    def render_raster(self, data):
        self.raster_calls.append(data)
        if not data:
            return None
        return RasterImage(handle=("raster", len(data)), width=self.raster_size[0], height=self.raster_size[1])


@pytest.fixture
def fake_backend():
    return FakeRenderBackend()


@pytest.fixture
def template_dir(tmp_path):
    """A small template library on disk."""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "MCB 1P.svg").write_text(SIMPLE_SVG, encoding="utf-8")
    (directory / "RCD translated.svg").write_text(TRANSLATED_SVG, encoding="utf-8")
    (directory / "far away.svg").write_text(FAR_AWAY_SVG, encoding="utf-8")
    (directory / "Blok rozdzielczy 4P.svg").write_text(DISTRIBUTION_BLOCK_SVG, encoding="utf-8")
    (directory / "photo.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (directory / "notes.txt").write_text("not a template", encoding="utf-8")
    return directory


@pytest.fixture
def simple_template(template_dir):
    return template_dir / "MCB 1P.svg"


@pytest.fixture
def distribution_template(template_dir):
    return template_dir / "Blok rozdzielczy 4P.svg"
