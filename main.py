import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from config import load_config
from ui.windows import MainWindow


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Place signature fields on a PDF and sign it.")
    parser.add_argument("file", nargs="?", help="PDF to upload on start")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main():
    """
    Main function to run the signing application.
    A PDF path passed on the command line is uploaded right away.
    """
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    logging.getLogger(__name__).info("Using backend %s", config.backend_base_url)

    app = QApplication(sys.argv)
    window = MainWindow(config, args.file)
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
