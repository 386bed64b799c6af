from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.readings",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Recorded reading",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(sensor_id="s1", reading_id=42, ignored="x"))

    assert line == "Recorded reading | sensor_id=s1 reading_id=42"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(sensor_id=None)) == "Recorded reading"
