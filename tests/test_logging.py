import logging

from app.core.logging import DEFAULT_FORMAT, ContextFilter, for_user


def _record(**extra):
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello", None, None)
    record.__dict__.update(extra)
    return record


def test_records_without_user_get_placeholder():
    record = _record()
    assert ContextFilter().filter(record) is True
    assert logging.Formatter(DEFAULT_FORMAT).format(record).endswith("| app.test | user=- | hello")


def test_filter_keeps_existing_username():
    record = _record(username="alice")
    ContextFilter().filter(record)
    assert logging.Formatter(DEFAULT_FORMAT).format(record).endswith("| user=alice | hello")


def test_for_user_stamps_username(caplog):
    logger = logging.getLogger("app.test")
    with caplog.at_level(logging.INFO, logger="app.test"):
        for_user(logger, "alice").info("created")
        for_user(logger, None).info("anonymous")

    assert [r.username for r in caplog.records] == ["alice", "-"]
