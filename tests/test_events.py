"""Tests for run observers."""

from rich.console import Console

from sales_etl.events import ConsoleObserver, EventLevel, MemoryObserver, RunEvent


def recording_console() -> Console:
    return Console(record=True, width=200, force_terminal=False)


def test_level_parse():
    assert EventLevel.parse("warning") is EventLevel.WARNING
    assert EventLevel.parse(EventLevel.ERROR) is EventLevel.ERROR


def test_memory_observer_keeps_order():
    observer = MemoryObserver()
    observer.emit(RunEvent(EventLevel.INFO, "first"))
    observer.emit(RunEvent(EventLevel.WARNING, "second"))
    observer.emit(RunEvent(EventLevel.INFO, "third"))

    assert observer.messages() == ["first", "second", "third"]
    assert observer.messages(EventLevel.INFO) == ["first", "third"]
    assert [e.message for e in observer.at_level(EventLevel.WARNING)] == ["second"]


def test_console_observer_filters_below_threshold():
    console = recording_console()
    observer = ConsoleObserver("WARNING", console=console)
    observer.emit(RunEvent(EventLevel.INFO, "routine progress"))
    observer.emit(RunEvent(EventLevel.WARNING, "nothing to load"))

    output = console.export_text()
    assert "routine progress" not in output
    assert "nothing to load" in output


def test_console_observer_renders_context_and_error():
    console = recording_console()
    observer = ConsoleObserver("DEBUG", console=console)
    try:
        raise RuntimeError("socket closed")
    except RuntimeError as e:
        observer.emit(RunEvent(EventLevel.ERROR, "Source extraction failed", {"source": "api", "error": e}))

    output = console.export_text()
    assert "Source extraction failed" in output
    assert "source=api" in output
    assert "RuntimeError: socket closed" in output
    assert "Traceback" in output


def test_event_error_property():
    assert RunEvent(EventLevel.INFO, "x", {"error": "not an exception"}).error is None
    err = ValueError("bad")
    assert RunEvent(EventLevel.ERROR, "x", {"error": err}).error is err
