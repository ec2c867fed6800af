"""Tests for dotlog.trace — the function tracing decorator."""

from pathlib import Path

import pytest

from dotlog.levels import DEBUG, TRACE
from dotlog.logger import Logger
from dotlog.manager import create_logger, get_logger
from dotlog.trace import _short_repr, trace


@pytest.fixture
def tracer(recorder):
    return Logger("tests.trace", recorder, TRACE)


class TestShortRepr:

    def test_long_string_cut(self):
        assert _short_repr("x" * 60) == "'" + "x" * 47 + "...'"

    def test_long_list_summarized(self):
        assert _short_repr([1, 2, 3, 4]) == "[...4 items...]"

    def test_path(self):
        assert _short_repr(Path("a")) == "Path('a')"

    def test_short_values_unchanged(self):
        assert _short_repr([1, 2]) == "[1, 2]"


class TestTraceDecorator:

    def test_entry_and_return(self, tracer, recorder):
        @trace(logger=tracer)
        def add(a, b=0):
            return a + b

        assert add(1, b=2) == 3
        assert len(recorder.texts) == 2
        assert recorder.texts[0].endswith("add(1, b=2)")
        assert recorder.texts[0].startswith(">> ")
        assert recorder.texts[1].endswith("add returned: 3")
        assert all(m.priority is TRACE for m in recorder.messages)

    def test_none_result_not_logged(self, tracer, recorder):
        @trace(logger=tracer)
        def noop():
            return None

        noop()
        assert len(recorder.texts) == 1

    def test_exception_logged_and_reraised(self, tracer, recorder):
        @trace(logger=tracer)
        def boom():
            raise RuntimeError("bad input")

        with pytest.raises(RuntimeError):
            boom()
        assert recorder.texts[-1].endswith("boom raised: RuntimeError: bad input")

    def test_disabled_logger_skips_formatting(self, recorder):
        quiet = Logger("quiet", recorder, DEBUG)

        @trace(logger=quiet)
        def work(x):
            return x * 2

        assert work(4) == 8
        assert recorder.messages == []

    def test_method_hides_self(self, tracer, recorder):
        class Box:
            @trace(logger=tracer)
            def put(self, item):
                return item

        Box().put("a")
        assert "put(self, 'a')" in recorder.texts[0]

    def test_wraps_metadata(self, tracer):
        @trace(logger=tracer)
        def documented():
            """Docstring survives."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring survives."

    def test_named_logger(self, recorder):
        create_logger("svc.io", recorder, TRACE)

        @trace("svc.io")
        def fetch(url):
            return len(url)

        fetch("http://x")
        assert len(recorder.texts) == 2
        assert all(m.source == "svc.io" for m in recorder.messages)

    def test_bare_uses_module_logger(self, recorder):
        @trace
        def plain():
            return "ok"

        module_logger = get_logger(plain.__module__)
        module_logger.channel = recorder
        module_logger.threshold = TRACE
        assert plain() == "ok"
        assert len(recorder.texts) == 2
        assert recorder.messages[0].source == plain.__module__

    def test_bare_default_threshold_is_silent(self, recorder):
        get_logger("").channel = recorder

        @trace
        def plain():
            return 1

        plain()
        assert recorder.messages == []
