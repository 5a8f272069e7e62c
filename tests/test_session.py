import io

from lox.errors import Diagnostic
from lox.session import ExitCode, Session


def test_sessions_do_not_share_globals(capsys):
    first = Session()
    second = Session()
    first.run_source('var shared = "first";')
    assert second.run_source('print shared;') == ExitCode.RUNTIME_ERROR
    assert "Undefined variable 'shared'." in capsys.readouterr().err


def test_state_persists_across_runs_in_one_session(capsys):
    session = Session()
    session.run_source('fun greet(n) { return "hi " + n; }')
    session.run_source('print greet("there");')
    assert capsys.readouterr().out.strip() == 'hi there'


def test_diagnostics_are_structured():
    err = io.StringIO()
    session = Session(stderr=err)
    assert session.run_source('var a = 1;\nprint a +;') == ExitCode.STATIC_ERROR
    assert session.errors.diagnostics == [Diagnostic('static', 2, " at ';'", 'Expect expression.')]
    assert "Expect expression." in err.getvalue()


def test_static_error_blocks_later_execute():
    session = Session(stderr=io.StringIO())
    statements = session.parse('print 1')
    assert session.execute(statements) == ExitCode.STATIC_ERROR


def test_debug_trace_levels(tmp_path):
    trace_file = tmp_path / 'trace.txt'
    with Session(debug_level=2, debug_file=str(trace_file), stdout=io.StringIO()) as session:
        session.run_source('{ var a = 1; print a; }')
    trace = trace_file.read_text(encoding='utf-8')
    assert 'scanned' in trace
    assert '(block (var a = 1) (; (call print a)))' in trace
    assert 'resolve a at line 1: depth 0' in trace
    assert 'declare a: number = 1' in trace
    # level 3 and 4 details stay out
    assert 'call <native fn print>' not in trace
    assert 'token ' not in trace


def test_no_trace_file_without_debug(tmp_path):
    trace_file = tmp_path / 'trace.txt'
    with Session(debug_file=str(trace_file), stdout=io.StringIO()) as session:
        session.run_source('print 1;')
    assert not trace_file.exists()
