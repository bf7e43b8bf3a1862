"""Dedicated launcher module for `python -m gui` or the ``users-table`` script."""

from __future__ import annotations

import sys

from gui.app.bootstrap import create_app
from gui.main_window import MainWindow


def main() -> int:  # pragma: no cover - runtime
    ctx = create_app(headless=False)
    app = ctx.qt_app
    if app is None:
        print("PyQt6 is required to run the users table.", file=sys.stderr)  # noqa: T201
        return 1
    win = MainWindow(ctx.event_bus)
    win.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
