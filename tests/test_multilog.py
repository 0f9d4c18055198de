import io
import json
from datetime import datetime

import pytest

from booklog.multilog import JsonLogger, Level, MultiSourceLogger


class BrokenWriter:
    def __init__(self):
        self.attempts = 0

    def write(self, data):
        self.attempts += 1
        raise OSError("sink down")


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


@pytest.mark.parametrize(
    "level, expected",
    [
        (Level.DEBUG, ["info", "error"]),
        (Level.INFO, ["info", "error"]),
        (Level.WARN, ["error"]),
        (Level.ERROR, ["error"]),
    ],
)
def test_level_threshold_filters_records(level, expected):
    out = io.StringIO()
    logger = JsonLogger(out, level)
    logger.info("info")
    logger.error("error")
    assert [r["msg"] for r in _records(out)] == expected


def test_info_record_shape():
    out = io.StringIO()
    JsonLogger(out).info("checking", author="jack jones")
    [record] = _records(out)
    assert record["level"] == "INFO"
    assert record["msg"] == "checking"
    assert record["author"] == "jack jones"
    assert datetime.fromisoformat(record["time"]).tzinfo is not None


def test_each_record_is_one_line():
    out = io.StringIO()
    logger = JsonLogger(out)
    logger.info("first")
    logger.error("second")
    assert [r["msg"] for r in _records(out)] == ["first", "second"]


def test_error_level_filters_info():
    out = io.StringIO()
    logger = JsonLogger(out, Level.ERROR)
    logger.info("hidden")
    logger.error("shown", length=0)
    records = _records(out)
    assert [r["msg"] for r in records] == ["shown"]
    assert records[0]["level"] == "ERROR"
    assert records[0]["length"] == 0


def test_exception_attribute_is_text():
    out = io.StringIO()
    JsonLogger(out).error("failed", err=RuntimeError("boom"))
    assert _records(out)[0]["err"] == "boom"


def test_failing_writer_is_ignored():
    writer = BrokenWriter()
    JsonLogger(writer).info("anything")
    assert writer.attempts == 1


def test_multi_source_writes_to_all_sinks():
    first, second, stdout = io.StringIO(), io.StringIO(), io.StringIO()
    logger = MultiSourceLogger(first, second, stdout=stdout)
    logger.info("server started")
    for stream in (first, second, stdout):
        assert [r["msg"] for r in _records(stream)] == ["server started"]


def test_multi_source_applies_level():
    sink, stdout = io.StringIO(), io.StringIO()
    logger = MultiSourceLogger(sink, level=Level.ERROR, stdout=stdout)
    logger.info("quiet")
    logger.error("loud", err=ValueError("bad"))
    for stream in (sink, stdout):
        records = _records(stream)
        assert [r["msg"] for r in records] == ["loud"]
        assert records[0]["err"] == "bad"


def test_multi_source_survives_broken_sink():
    broken, stdout = BrokenWriter(), io.StringIO()
    MultiSourceLogger(broken, stdout=stdout).error("still logged")
    assert broken.attempts == 1
    assert [r["msg"] for r in _records(stdout)] == ["still logged"]


def test_multi_source_has_one_logger_per_sink():
    logger = MultiSourceLogger(io.StringIO(), io.StringIO(), stdout=io.StringIO())
    assert len(logger.loggers) == 3