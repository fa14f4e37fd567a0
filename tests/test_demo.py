import io

import pytest

from armel import demo
from armel.arena import DEFAULT_ALIGNMENT


def test_simple_alloc_output():
    out = io.StringIO()
    assert demo.simple_alloc(out) == (10, 42)
    assert out.getvalue() == "a = 10, b = 42\n"


def test_static_arena_values():
    out = io.StringIO()
    values = demo.static_arena(out)
    assert len(values) == 16
    assert values[10] == 10.5
    assert all(value - int(value) == 0.5 for value in values)
    assert out.getvalue() == "values[10] = 10.5\n"


def test_temp_scope_rewinds_to_mark():
    out = io.StringIO()
    assert demo.temp_scope(out) == 0
    assert out.getvalue() == "temp[2] = 4\n"


def test_alignment_report():
    out = io.StringIO()
    base, cursor, item = demo.alignment_report(out)
    assert base == 0
    assert item == 0
    assert 0 <= cursor < DEFAULT_ALIGNMENT
    text = out.getvalue()
    assert text.startswith("[Arena]\n")
    assert text.endswith(f"{base} \n{cursor} \n{item} \n")


def test_main_runs_all(capsys):
    assert demo.main([]) == 0
    captured = capsys.readouterr().out
    assert "a = 10, b = 42" in captured
    assert "values[10] = 10.5" in captured
    assert "temp[2] = 4" in captured
    assert "[Arena]" in captured


def test_main_runs_selected(capsys):
    assert demo.main(["simple"]) == 0
    assert capsys.readouterr().out == "a = 10, b = 42\n"


def test_main_rejects_unknown_example():
    with pytest.raises(SystemExit):
        demo.main(["nonexistent"])