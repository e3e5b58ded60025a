"""Allow running KegelBump as a module: python -m kegelbump."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import KegelBumpApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("KegelBump")
    app.setOrganizationName("KegelBump")

    # Dock icon: generated placeholder, accent orange ring
    from PyQt6.QtGui import QIcon, QPixmap, QPainter, QColor, QPen
    icon = QPixmap(256, 256)
    icon.fill(QColor(0, 0, 0, 0))
    p = QPainter(icon)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setPen(QPen(QColor("#FF9500"), 28))
    p.drawEllipse(32, 32, 192, 192)
    p.end()
    app.setWindowIcon(QIcon(icon))

    window = KegelBumpApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
