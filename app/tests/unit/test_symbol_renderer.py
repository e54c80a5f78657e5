"""Tests for the Qt render backend."""

import pytest

pytest.importorskip("PyQt6")

from controllers.schematic_controller import SchematicController
from controllers.symbol_builder import SymbolBuilder
from GUI.symbol_renderer import QtRenderBackend
from PyQt6.QtCore import QBuffer, QIODevice
from PyQt6.QtGui import QColor, QImage
from symbols.constants import DEFAULT_SYMBOL_HEIGHT, DEFAULT_SYMBOL_WIDTH


def _png_bytes(width, height):
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor("red"))
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    image.save(buffer, "PNG")
    return bytes(buffer.data())


class TestQtRenderBackend:
    def test_renders_markup_at_size(self, qapp):
        markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><rect width="10" height="10"/></svg>'
        image = QtRenderBackend().render_markup(markup, 40.4, 20.6)
        assert isinstance(image, QImage)
        assert (image.width(), image.height()) == (40, 21)

    def test_pixel_scale(self, qapp):
        markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"/>'
        image = QtRenderBackend(pixel_scale=2.0).render_markup(markup, 10, 5)
        assert (image.width(), image.height()) == (20, 10)

    def test_invalid_markup(self, qapp):
        assert QtRenderBackend().render_markup("not svg at all", 10, 10) is None

    def test_raster(self, qapp):
        raster = QtRenderBackend().render_raster(_png_bytes(12, 7))
        assert (raster.width, raster.height) == (12.0, 7.0)
        assert not raster.handle.isNull()

    def test_bad_raster(self, qapp):
        assert QtRenderBackend().render_raster(b"garbage") is None


class TestBuilderWithQt:
    def test_symbol_gets_image(self, qapp, simple_template):
        symbol = SymbolBuilder(render_backend=QtRenderBackend()).build(simple_template)
        assert isinstance(symbol.visual, QImage)
        assert symbol.visual.width() == round(symbol.width)

    def test_raster_symbol_size(self, qapp, tmp_path):
        path = tmp_path / "badge.png"
        path.write_bytes(_png_bytes(30, 15))
        symbol = SymbolBuilder(render_backend=QtRenderBackend()).build(path, drop_point=(15.0, 15.0))
        assert (symbol.width, symbol.height) == (30.0, 15.0)
        assert symbol.top_left == (0.0, 7.5)

    def test_overlong_size_places_at_default_size(self, qapp, tmp_path):
        path = tmp_path / "huge.svg"
        path.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 300 200">'
            f'<rect x="0" y="0" width="{"9" * 400}" height="100" style="fill:#fff"/></svg>',
            encoding="utf-8",
        )
        controller = SchematicController(builder=SymbolBuilder(render_backend=QtRenderBackend()))
        symbol = controller.place_symbol(path)
        assert (symbol.width, symbol.height) == (DEFAULT_SYMBOL_WIDTH, DEFAULT_SYMBOL_HEIGHT)
