"""Test logging configuration"""

import logging
import pytest

from yt_sync.utils.logger import (
    ConsoleMessageFilter,
    OperationLogger,
    get_current_log_file,
    get_logger,
    parse_size,
    setup_logging
)


def make_record(level, name="yt_sync.test", **extra):
    record = logging.LogRecord(name, level, __file__, 1, "message", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogger:
    """Test logger helpers"""

    def test_parse_size(self):
        assert parse_size("10MB") == 10 * 1024 ** 2
        assert parse_size("500kb") == 500 * 1024
        assert parse_size("1.5 GB") == int(1.5 * 1024 ** 3)
        with pytest.raises(ValueError):
            parse_size("lots")

    def test_console_filter(self):
        console_filter = ConsoleMessageFilter()

        assert console_filter.filter(make_record(logging.WARNING)) is True
        assert console_filter.filter(make_record(logging.INFO, console_output=True)) is True
        assert console_filter.filter(make_record(logging.INFO, name="yt_sync.console")) is True
        assert console_filter.filter(make_record(logging.INFO)) is False
        assert console_filter.filter(make_record(logging.DEBUG)) is False

    def test_file_logging(self, temp_dir):
        log_file = temp_dir / "logs" / "yt-sync.log"

        setup_logging(level="DEBUG", log_file=str(log_file), console_output=False)
        get_logger("yt_sync.test").debug("technical detail")

        assert get_current_log_file() == log_file
        assert "technical detail" in log_file.read_text(encoding="utf-8")

    def test_no_file_logging(self):
        setup_logging(level="INFO", console_output=True)
        assert get_current_log_file() is None

    def test_console_info_reaches_console(self, capsys):
        setup_logging(level="INFO", console_output=True, colored_output=False)
        logger = get_logger("yt_sync.test")

        logger.console_info("visible to user")
        logger.info("file only")

        output = capsys.readouterr().out
        assert "visible to user" in output
        assert "file only" not in output

    def test_operation_logger_without_progress(self, capsys):
        setup_logging(level="INFO", console_output=True, colored_output=False)
        operation = OperationLogger(get_logger("yt_sync.test"), "Sync of P1", show_progress=False)

        operation.start()
        operation.progress("Song One", 1, 2)
        operation.complete("2 new songs successfully synced to /tmp/out")

        output = capsys.readouterr().out
        assert "Starting Sync of P1" in output
        assert "2 new songs successfully synced to /tmp/out" in output
        assert operation.progress_bar is None
