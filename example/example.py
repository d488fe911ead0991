import argparse
import logging
import sys

import numpy as np
from PySide6.QtWidgets import QApplication, QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLabel

from geoglobe import globe
from geoglobe.config import GlobeConfig


class GlobeTestWidget(QWidget):

    def __init__(self, config: GlobeConfig, seed: int | None = None):
        super().__init__()
        hbox = QHBoxLayout()
        vbox = QVBoxLayout()

        # Text area to print view info
        self.text = QLabel('Waiting for first frame')
        self.text.setMinimumWidth(200)
        vbox.addWidget(self.text)
        vbox.addStretch()
        hbox.addLayout(vbox)

        # Globe Widget
        self.globe = globe.GlobeWidget(self, config=config, rng=np.random.default_rng(seed))
        hbox.addWidget(self.globe, stretch=1)

        # Connect globe events
        self.globe.infoSig.connect(self.on_window)
        self.setLayout(hbox)

    def on_window(self, info_dict: dict):
        s = f"Pitch:    {info_dict['pitch']:.2f}\n"
        s += f"Yaw:      {info_dict['yaw']:.2f}\n"
        s += f"Auto:     {info_dict['auto_rotation']:.2f}\n\n"
        s += f"Links:    {info_dict['connections']}\n"
        s += f"Frames:   {info_dict['frames']}\n\n"
        s += "Visible:\n  " + "\n  ".join(info_dict['visible_cities'])
        self.text.setText(s)


class MainWindow(QMainWindow):

    def __init__(self, config: GlobeConfig, seed: int | None = None):
        super().__init__()
        self.setWindowTitle("Community Globe")
        self.globe_widget = GlobeTestWidget(config, seed)
        self.setCentralWidget(self.globe_widget)
        self.statusBar().showMessage('Left click/drag to rotate. Hover to pause the spin')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive community globe")
    parser.add_argument('--seed', type=int, default=None,
                        help="seed for the connection network")
    parser.add_argument('--snapshot', metavar='PATH', default=None,
                        help="render one frame to an image file and exit")
    parser.add_argument('--size', type=int, default=800, help="snapshot size in pixels")
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GlobeConfig.from_env()

    app = QApplication(sys.argv)
    if args.snapshot:
        globe.save_snapshot(args.snapshot, args.size, args.size, config=config,
                            rng=np.random.default_rng(args.seed))
        sys.exit(0)

    window = MainWindow(config, args.seed)
    window.resize(1200, 800)
    window.show()
    sys.exit(app.exec())
