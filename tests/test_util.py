import io
from time import time

from minefield.util import counted, elapsed, report


def test_counted():
    assert counted(1, "attempt") == "1 attempt"
    assert counted(0, "board") == "0 boards"
    assert counted(12345, "iteration") == "12,345 iterations"


def test_elapsed():
    assert elapsed(time() - 3725.5).startswith("01:02:05")
    assert elapsed(time()) == "00:00:00.00"


def test_report():
    out = io.StringIO()
    report(out, "Tried 10 boards...")
    report(None, "dropped")
    assert out.getvalue() == "Tried 10 boards...\n"
