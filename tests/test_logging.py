import io

from retort.utils import logging
from retort.utils.logging import LogLevel, formatData, logged


def test_format_data():
	assert formatData(None) == "◌"
	assert formatData([]) == "◌"
	assert formatData("a b") == "'a b'"
	assert formatData(True) == "✓"
	assert formatData(1.234) == "1.23"
	assert formatData([1, 2]) == "1,2"


def test_threshold():
	assert logged(LogLevel.Exception)
	assert logged(LogLevel.Debug) == (logging.THRESHOLD is LogLevel.Debug)


def test_warning(monkeypatch):
	stream = io.StringIO()
	monkeypatch.setattr(logging, "ERR", stream)
	entry = logging.warning("Could not read file", Path="/tmp/x")
	assert entry.level is LogLevel.Warning
	assert entry.context == {"Path": "/tmp/x"}
	assert "Could not read file" in stream.getvalue()


def test_exception(monkeypatch):
	stream = io.StringIO()
	monkeypatch.setattr(logging, "ERR", stream)
	try:
		raise ValueError("bad value")
	except ValueError as e:
		assert logging.exception(e, "Rendering failed") is e
	output = stream.getvalue()
	assert output.startswith("!!! EXCP Rendering failed: [ValueError] bad value\n")
	assert "... in test_exception" in output


# EOF
