import argparse
import sys
import threading
import traceback
from pathlib import Path

from PySide6.QtWidgets import QApplication

# --- Add ROOT for imports ---
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from streamleech.app import main
from streamleech.app_settings import get_crash_logs_file_path, get_debug_logs_file_path
from streamleech.logging_utils import LOG_LEVEL_OPTIONS, configure_app_logging, enable_file_logging, get_logger

LOGGER = get_logger(__name__)


def _save_startup_traceback(traceback_text: str) -> None:
    try:
        path = get_crash_logs_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as handle:
            handle.write("[Startup Crash]\n")
            handle.write(traceback_text.rstrip("\n"))
            handle.write("\n\n")
    except OSError:
        LOGGER.exception("Could not write startup crash log")


def _install_startup_exception_hooks() -> None:
    def _handle_thread_exception(args: threading.ExceptHookArgs) -> None:
        error_text = "".join(
            traceback.format_exception(args.exc_type, args.exc_value, args.exc_traceback)
        ).strip()
        _save_startup_traceback(error_text)
        if args.thread is not None:
            sys.__excepthook__(args.exc_type, args.exc_value, args.exc_traceback)

    threading.excepthook = _handle_thread_exception


if __name__ == "__main__":
    parser = argparse.ArgumentParser(add_help=True)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVEL_OPTIONS,
        type=str.upper,
        help="Console log level.",
    )
    parser.add_argument(
        "--preferences-file",
        type=Path,
        default=None,
        help="Read and write preferences from this JSON file instead of the per-user one.",
    )
    parser.add_argument(
        "--debug-log",
        action="store_true",
        help="Also write logs to the debug log file in the app data folder.",
    )
    parsed_args, qt_args = parser.parse_known_args(sys.argv[1:])
    configure_app_logging(parsed_args.log_level)
    if parsed_args.debug_log:
        enable_file_logging(get_debug_logs_file_path())
    LOGGER.debug("Parsed startup args: parsed=%s qt=%s", parsed_args, qt_args)

    _install_startup_exception_hooks()
    app = QApplication([sys.argv[0], *qt_args])
    app.setQuitOnLastWindowClosed(True)
    try:
        window = main(existing_app=app, preferences_path=parsed_args.preferences_file)
    except Exception:
        _save_startup_traceback(traceback.format_exc())
        LOGGER.exception("Preferences window bootstrap failed")
        sys.exit(1)
    window.show()
    exit_code = app.exec()
    LOGGER.info("Qt event loop exited with code %s", exit_code)
    sys.exit(exit_code)
