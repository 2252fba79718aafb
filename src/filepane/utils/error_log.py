"""
Error logging utility for filepane
Appends unexpected failures (with stack traces) and expected notices to a
log file, and echoes them to stderr.
"""
import sys
import traceback
from datetime import datetime
from pathlib import Path


class ErrorLog:
    """File-backed log for error events and uncaught exceptions"""

    LOG_DIR = Path.home() / ".local" / "share" / "filepane"
    LOG_FILE = LOG_DIR / "errors.log"
    MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB

    @classmethod
    def setup(cls):
        """Create the log directory, or fall back to the working directory"""
        try:
            cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError:
            cls.LOG_DIR = Path.cwd()
            cls.LOG_FILE = cls.LOG_DIR / "errors.log"

    @classmethod
    def _format_entry(cls, level, description, exc_info=None):
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        separator = "=" * 80

        entry = f"\n{separator}\n{level} - {timestamp}\n{separator}\n"
        entry += f"{description}\n"
        if exc_info is not None:
            exc_type, exc_value, exc_traceback = exc_info
            entry += f"Exception Type: {exc_type.__name__}\n"
            entry += "\nStack Trace:\n"
            entry += "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        entry += f"{separator}\n"
        return entry

    @classmethod
    def _write(cls, entry):
        try:
            cls.setup()
            cls._rotate_log_if_needed()
            with open(cls.LOG_FILE, 'a', encoding='utf-8') as f:
                f.write(entry)
        except OSError as e:
            print(f"Failed to write error log: {e}", file=sys.stderr)
        print(entry, file=sys.stderr)

    @classmethod
    def log_event(cls, event):
        """Log an ErrorEvent. Expected events are written as notices."""
        if event.is_expected:
            cls._write(cls._format_entry("NOTICE", event.description))
            return
        exc_info = None
        if event.throwable is not None:
            exc = event.throwable
            exc_info = (type(exc), exc, exc.__traceback__)
        cls._write(cls._format_entry("ERROR", event.description, exc_info))

    @classmethod
    def log_exception(cls, exc_type, exc_value, exc_traceback):
        """sys.excepthook compatible handler for uncaught exceptions"""
        cls._write(cls._format_entry(
            "FATAL ERROR", f"Exception Message: {exc_value}",
            (exc_type, exc_value, exc_traceback)))

    @classmethod
    def _rotate_log_if_needed(cls):
        """Move the log aside once it exceeds MAX_LOG_SIZE"""
        if cls.LOG_FILE.exists() and cls.LOG_FILE.stat().st_size > cls.MAX_LOG_SIZE:
            backup_file = cls.LOG_FILE.with_suffix('.log.old')
            if backup_file.exists():
                backup_file.unlink()
            cls.LOG_FILE.rename(backup_file)

    @classmethod
    def install_exception_handler(cls):
        sys.excepthook = cls.log_exception

    @classmethod
    def get_log_path(cls) -> str:
        cls.setup()
        return str(cls.LOG_FILE)

    @classmethod
    def clear_log(cls):
        try:
            if cls.LOG_FILE.exists():
                cls.LOG_FILE.unlink()
        except OSError as e:
            print(f"Failed to clear log: {e}", file=sys.stderr)
