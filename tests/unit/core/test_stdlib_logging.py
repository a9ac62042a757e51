from __future__ import annotations

import io
import logging
from pathlib import Path

from depfetch.core.stdlib_logging import configure_stdlib_logging


def test_console_level_filters_messages() -> None:
    stream = io.StringIO()
    configure_stdlib_logging(level="WARNING", stream=stream)
    log = logging.getLogger("depfetch.core.resolve.walker")

    log.info("hidden")
    log.warning("shown")

    assert stream.getvalue() == "shown\n"


def test_reconfiguring_replaces_console_handler() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_stdlib_logging(stream=first)
    configure_stdlib_logging(stream=second)

    logging.getLogger("depfetch").info("foo: u1#r1")

    assert first.getvalue() == ""
    assert second.getvalue() == "foo: u1#r1\n"


def test_file_handler_records_debug(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "depfetch.log"
    stream = io.StringIO()
    configure_stdlib_logging(level="INFO", log_path=log_path, stream=stream)

    logging.getLogger("depfetch.core.fetch.git").debug("run git clone")
    for handler in logging.getLogger("depfetch").handlers:
        handler.flush()

    assert stream.getvalue() == ""
    assert "DEBUG depfetch.core.fetch.git: run git clone" in log_path.read_text(encoding="utf-8")


def test_custom_format() -> None:
    stream = io.StringIO()
    configure_stdlib_logging(fmt="[%(levelname)s] %(message)s", stream=stream)

    logging.getLogger("depfetch").info("all dependencies fetched!")

    assert stream.getvalue() == "[INFO] all dependencies fetched!\n"
