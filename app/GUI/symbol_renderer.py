"""Qt rendering backend for symbol visuals.

Produces QImage handles rather than QPixmaps so symbols can be rendered
outside the GUI thread.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QByteArray, QRectF, Qt
from PyQt6.QtGui import QImage, QPainter
from PyQt6.QtSvg import QSvgRenderer
from symbols.rendering import RasterImage, RenderBackend

logger = logging.getLogger(__name__)


class QtRenderBackend(RenderBackend):
    """Render symbol markup with QSvgRenderer into transparent QImages.

    Args:
        pixel_scale: device pixels per canvas unit of the produced images
    """

    def __init__(self, pixel_scale: float = 1.0):
        self.pixel_scale = pixel_scale

    def render_markup(self, markup: str, width: float, height: float) -> Optional[QImage]:
        renderer = QSvgRenderer(QByteArray(markup.encode("utf-8")))
        if not renderer.isValid():
            logger.warning("Symbol markup could not be parsed by QSvgRenderer")
            return None

        pixel_width = max(1, round(width * self.pixel_scale))
        pixel_height = max(1, round(height * self.pixel_scale))
        image = QImage(pixel_width, pixel_height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)

        painter = QPainter(image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        renderer.render(painter, QRectF(0, 0, pixel_width, pixel_height))
        painter.end()
        return image

    def render_raster(self, data: bytes) -> Optional[RasterImage]:
        image = QImage.fromData(data)
        if image.isNull():
            logger.warning("Raster template could not be decoded")
            return None
        return RasterImage(handle=image, width=float(image.width()), height=float(image.height()))
