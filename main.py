import argparse
import logging
import sys
from PySide6 import QtWidgets

from wheel_data import DEMO_OPTIONS, WheelConfig, load_config
from wheel_engine import InvalidConfiguration
from wheel_widgets import GameWindow, make_driver

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spin a prize wheel")
    parser.add_argument("config", nargs="?", help="JSON wheel config (demo wheel if omitted)")
    parser.add_argument(
        "--driver",
        choices=["animation", "timer"],
        default="animation",
        help="animation backend for the rotation",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    args: argparse.Namespace = parse_args(app.arguments()[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )

    try:
        config: WheelConfig = (
            load_config(args.config) if args.config else WheelConfig.from_dict(DEMO_OPTIONS)
        )
    except InvalidConfiguration as e:
        print(f"Invalid wheel configuration: {e}", file=sys.stderr)
        sys.exit(1)

    w = GameWindow(config, driver=make_driver(args.driver))
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
