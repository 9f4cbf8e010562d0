import io
import logging

import pytest

from board_locator.console import ConsoleFormatter, configure_logging, level_name


def make_record(name="board_locator.detection", level=logging.INFO, msg="hello", **extra):
    record = logging.LogRecord(name, level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize("levelno, expected", [
    (logging.CRITICAL, "Fatal"),
    (logging.ERROR, "Error"),
    (logging.WARNING, "Warn"),
    (logging.INFO, "Info"),
    (logging.DEBUG, "Debug"),
    (45, "Error"),
    (5, "Debug"),
])
def test_level_names(levelno, expected):
    assert level_name(levelno) == expected


def test_plain_layout():
    fmt = ConsoleFormatter(include_time=False)
    assert fmt.format(make_record()) == "Info   board_locator.detection: hello"


def test_detail_lines_align_with_message():
    fmt = ConsoleFormatter(include_time=False)
    out = fmt.format(make_record(level=logging.WARNING, detail="first\nsecond"))
    lines = out.split("\n")
    assert lines[0] == "Warn   board_locator.detection: hello"
    column = lines[0].index("hello")
    assert lines[1] == " " * column + "first"
    assert lines[2] == " " * column + "second"


def test_root_records_have_no_sender():
    fmt = ConsoleFormatter(include_time=False)
    assert fmt.format(make_record(name="root", level=logging.ERROR)) == "Error  hello"


def test_date_and_time_prefix():
    fmt = ConsoleFormatter(include_date=True, include_time=True,
                           date_format="%Y", time_format="%H")
    record = make_record()
    out = fmt.format(record)
    year, hour = fmt.formatTime(record, "%Y"), fmt.formatTime(record, "%H")
    assert out.startswith(f"{year} {hour}  Info ")


def test_color_codes():
    fmt = ConsoleFormatter(include_time=False, use_color=True)
    out = fmt.format(make_record(level=logging.ERROR, detail="x"))
    assert "\033[31mError\033[0m" in out
    assert "\033[90mboard_locator.detection: \033[0m" in out
    # detail indentation counts visible characters only
    assert out.split("\n")[1] == " " * len("Error  board_locator.detection: ") + "x"


def test_configure_logging(restore_root_logger):
    stream = io.StringIO()
    configure_logging(logging.DEBUG, stream=stream, include_time=False)
    logging.getLogger("board_locator.test").debug("scan %d", 3)
    assert stream.getvalue() == "Debug  board_locator.test: scan 3\n"
