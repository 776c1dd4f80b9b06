import logging

from docgate.logging import (
    ColoredFormatter,
    exception_exc_info,
    format_exception_summary,
    get_logger,
    setup_logging,
)


def test_get_logger_prefixes_docgate_namespace() -> None:
    assert get_logger("module").name == "docgate.module"
    assert get_logger("docgate.ingest").name == "docgate.ingest"


def test_colored_formatter_formats_message() -> None:
    formatter = ColoredFormatter("[%(levelname)s] %(message)s", use_colors=False)
    record = logging.LogRecord(
        name="docgate.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )
    assert "[INFO] hello" in formatter.format(record)


def test_colored_formatter_does_not_mutate_record() -> None:
    formatter = ColoredFormatter("[%(levelname)s] %(message)s", use_colors=True)
    record = logging.LogRecord("docgate.test", logging.WARNING, __file__, 1, "careful", (), None)
    rendered = formatter.format(record)
    assert "\033[" in rendered
    assert record.levelname == "WARNING"


def test_setup_logging_with_file_handler(tmp_path) -> None:
    log_file = tmp_path / "docgate.log"
    setup_logging(level="DEBUG", log_file=str(log_file))
    logger = get_logger("test")
    logger.debug("debug entry")
    for handler in logging.getLogger("docgate").handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "debug entry" in content
    assert "\033[" not in content

    for handler in list(logging.getLogger("docgate").handlers):
        handler.close()
    logging.getLogger("docgate").handlers.clear()


def test_format_exception_summary_truncates_long_messages() -> None:
    summary = format_exception_summary(RuntimeError("x" * 300), max_length=40)
    assert summary.startswith("RuntimeError: ")
    assert summary.endswith("...")
    assert len(summary) == 40


def test_format_exception_summary_collapses_newlines() -> None:
    summary = format_exception_summary(OSError("disk\nfull"))
    assert summary == "OSError: disk full"


def test_exception_exc_info_contains_traceback() -> None:
    try:
        raise ValueError("bad value")
    except ValueError as exc:
        captured = exc

    exc_info = exception_exc_info(captured)
    assert exc_info[0] is ValueError
    assert exc_info[1] is captured
    assert exc_info[2] is captured.__traceback__
