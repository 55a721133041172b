import io
import logging

from fire_planner.utils.logging import get_logger, log_context, set_log_context, setup_logging


def _capture():
    buf = io.StringIO()
    setup_logging("DEBUG", stream=buf)
    return buf


def test_lines_carry_context_fields():
    buf = _capture()
    set_log_context(session_id="s-1")
    with log_context(run_id="r-42"):
        get_logger("test").info("hello %s", "world")
    line = buf.getvalue().strip()
    assert "level=INFO logger=fire_planner.test" in line
    assert "session_id=s-1 run_id=r-42" in line
    assert line.endswith("msg=hello world")


def test_log_context_is_restored_on_exit():
    buf = _capture()
    with log_context(run_id="inner"):
        pass
    get_logger("test").warning("after")
    assert "run_id=-" in buf.getvalue()


def test_traceback_follows_the_message():
    buf = _capture()
    try:
        raise ValueError("boom")
    except ValueError:
        get_logger("test").exception("failed")
    out = buf.getvalue()
    assert "msg=failed" in out
    assert "ValueError: boom" in out


def test_setup_replaces_handlers():
    setup_logging("INFO", stream=io.StringIO())
    setup_logging("INFO", stream=io.StringIO())
    assert len(logging.getLogger().handlers) == 1
