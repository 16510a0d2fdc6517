"""Tests for the loguru sink setup."""
from loguru import logger

from cronosmcp.config import LoggingConfig
from cronosmcp.core import create_module_filter, setup_logging
from cronosmcp.core.logging_config import format_record, get_console_format


class _Level:
    def __init__(self, name, no):
        self.name = name
        self.no = no


def test_clean_format_escapes_markup():
    record = {"message": "pair {WCRO} <USDC>", "level": _Level("INFO", 20)}

    assert format_record(record) == "pair {{WCRO}} \\<USDC>\n"


def test_clean_format_colors_errors():
    record = {"message": "boom", "level": _Level("ERROR", 40)}

    assert format_record(record) == "<red>boom</red>\n"


def test_console_styles():
    assert get_console_format("clean") is format_record
    assert "{time:HH:mm:ss}" in get_console_format("timestamp")
    assert "{name}" in get_console_format("detailed")


def test_module_filter():
    keep_warnings = create_module_filter({"cronosmcp.toolkits": "WARNING"})

    assert keep_warnings({"name": "cronosmcp.toolkits.data.vvs_toolkit", "level": _Level("INFO", 20)}) is False
    assert keep_warnings({"name": "cronosmcp.toolkits.data.vvs_toolkit", "level": _Level("ERROR", 40)}) is True
    assert keep_warnings({"name": "cronosmcp.server.main", "level": _Level("DEBUG", 10)}) is True


def test_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "cronos.log"
    setup_logging(LoggingConfig(enable_console=False, enable_file=True, file_path=str(log_file)))

    logger.info("file sink ready")
    logger.complete()
    logger.remove()

    assert "file sink ready" in log_file.read_text()
