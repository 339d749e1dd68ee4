"""
Test fixtures shared across all Code Analyzer tests.
"""

from datetime import datetime, timezone

import pytest

from codeanalyzer.core.analyzer import CodeAnalyzer
from codeanalyzer.core.utils import CountingUniqueIdGenerator, FixedClock
from codeanalyzer.models.event_models import EventType

FIXED_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_workspace_dir(tmp_path):
    """A small source tree: two Apex classes and a nested Python file."""
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "Foo.cls").write_text(
        "public class Foo {   \n"
        "    public void bar() {}\n"
        "    public void baz() {}\t\n"
        "}\n"
    )
    (src / "Bar.cls").write_text("public class Bar {}\n")
    (src / "sub" / "helper.py").write_text("def helper():\n    return 1\n")
    (tmp_path / "README.md").write_text("clean readme\n")
    return tmp_path


@pytest.fixture
def clock():
    return FixedClock(FIXED_TIME)


@pytest.fixture
def analyzer(clock):
    """Analyzer with a fixed clock and deterministic workspace ids."""
    code_analyzer = CodeAnalyzer()
    code_analyzer._set_clock(clock)
    code_analyzer._set_unique_id_generator(CountingUniqueIdGenerator())
    return code_analyzer


@pytest.fixture
def captured_events(analyzer):
    """Every event the analyzer emits, in emission order."""
    events = []
    for event_type in EventType:
        analyzer.on_event(event_type, events.append)
    return events
