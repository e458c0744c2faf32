import logging

from gamesearch.debug import LEVEL_MAP, DebugLevel, DebugManager


def make_manager(name):
    manager = DebugManager(name=f"gamesearch.tests.{name}")
    manager.configure(level=DebugLevel.DEBUG)
    return manager


def test_messages_respect_level(caplog):
    manager = make_manager("level")
    manager.configure(level=DebugLevel.INFO)

    with caplog.at_level(logging.DEBUG, logger="gamesearch.tests.level"):
        manager.info("shown", "search")
        manager.debug("hidden", "search")

    assert "[search] shown" in caplog.text
    assert "hidden" not in caplog.text


def test_component_filter(caplog):
    manager = make_manager("components")
    manager.configure(components=["search"])

    with caplog.at_level(logging.DEBUG, logger="gamesearch.tests.components"):
        manager.debug("kept", "search")
        manager.debug("dropped", "board")

    assert "kept" in caplog.text
    assert "dropped" not in caplog.text


def test_none_level_silences_everything():
    manager = make_manager("none")
    manager.configure(level=DebugLevel.NONE)
    assert not manager.is_enabled_for(DebugLevel.ERROR)


def test_timer_reports_elapsed(caplog):
    manager = make_manager("timer")

    with caplog.at_level(logging.DEBUG, logger="gamesearch.tests.timer"):
        manager.start_timer("work")
        elapsed = manager.end_timer("work", "search")

    assert elapsed is not None and elapsed >= 0
    assert "Performance [work]" in caplog.text
    assert manager.end_timer("work") is None


def test_trace_records_carry_level_name(caplog):
    manager = make_manager("trace")
    manager.configure(level=DebugLevel.TRACE)

    with caplog.at_level(LEVEL_MAP[DebugLevel.TRACE], logger="gamesearch.tests.trace"):
        manager.trace("step", "board")

    assert [record.levelname for record in caplog.records] == ["TRACE"]
    assert caplog.records[0].getMessage() == "[board] step"


def test_set_from_string():
    manager = make_manager("strings")
    assert manager.set_from_string("trace")
    assert manager.level is DebugLevel.TRACE
    assert not manager.set_from_string("loud")
    assert manager.level is DebugLevel.TRACE


def test_log_file(tmp_path):
    manager = make_manager("file")
    log_file = tmp_path / "search.log"

    manager.configure(log_file=str(log_file))
    manager.warning("written to file")
    manager.configure(log_file="")

    assert "written to file" in log_file.read_text()
