"""
AutoDispose - Demo Entry Point

Opens a window that registers one resource of every supported kind and
releases them all when the window closes.

Flags:
    --debug, -d            Enable debug logging (console + file)
    --verbose, -v          Verbose debug logging
    --report               Log each disposal and the teardown summary
    --track-performance    Time every cleanup action
    --auto-close-ms N      Close the window after N milliseconds
"""
import sys
from typing import List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from core.disposal import configure_diagnostics
from core.logging.logger import get_logger, setup_logging
from versioning import APP_NAME, APP_VERSION
from widgets.dispose_demo import DisposeDemoWindow

logger = get_logger(__name__)


def parse_auto_close_ms(argv: List[str]) -> Optional[int]:
    """Return the ``--auto-close-ms`` value, or None when absent/invalid."""
    if '--auto-close-ms' not in argv:
        return None
    idx = argv.index('--auto-close-ms')
    try:
        value = int(argv[idx + 1])
    except (IndexError, ValueError):
        logger.warning("Ignoring invalid --auto-close-ms value")
        return None
    return value if value >= 0 else None


def main() -> int:
    """Main entry point for the demo application."""
    argv = list(sys.argv)
    debug_mode = '--debug' in argv or '-d' in argv
    verbose_mode = '--verbose' in argv or '-v' in argv
    setup_logging(debug=debug_mode, verbose=verbose_mode)

    configure_diagnostics(
        report_enabled='--report' in argv,
        track_performance='--track-performance' in argv,
    )

    logger.info("=" * 60)
    logger.info("%s %s demo starting", APP_NAME, APP_VERSION)
    logger.info("=" * 60)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    window = DisposeDemoWindow()
    window.resize(360, 120)
    window.show()
    window.start()

    auto_close_ms = parse_auto_close_ms(argv)
    if auto_close_ms is not None:
        QTimer.singleShot(auto_close_ms, window.close)

    exit_code = app.exec()
    logger.info("Demo exited with code %s", exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
