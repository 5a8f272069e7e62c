from lox.resolver import resolve_program
from lox.session import ExitCode, Session


def resolve(source):
    session = Session()
    statements = session.parse(source)
    assert not session.errors.had_error
    locals_ = resolve_program(statements, session)
    return session, statements, locals_


def messages(session):
    return [d.message for d in session.errors.diagnostics]


def test_local_distances():
    session, statements, locals_ = resolve("{ var a = 1; { print a; } }")
    assert not session.errors.had_error
    inner = statements[0].statements[1]
    call = inner.statements[0].expression
    [a] = call.arguments
    assert locals_[a] == 1
    # globals are left out of the map
    assert call.callee not in locals_


def test_resolution_is_idempotent():
    source = """
    fun outer() {
      var x = 1;
      fun inner() { return x; }
      return inner;
    }
    """
    session = Session()
    statements = session.parse(source)
    first = resolve_program(statements, session)
    second = resolve_program(statements, session)
    assert first == second
    assert sorted(first.values()) == [0, 1]


def test_self_reference_in_initializer():
    session, _, _ = resolve("{ var a = a; }")
    assert messages(session) == ["Can't read local variable in its own initializer."]


def test_self_reference_at_top_level():
    session, _, _ = resolve("var a = a;")
    assert messages(session) == ["Can't read local variable in its own initializer."]


def test_top_level_redeclaration_is_allowed():
    session, _, _ = resolve("var a = 1; var a = 2; var b = a;")
    assert not session.errors.had_error


def test_duplicate_local():
    session, _, _ = resolve("fun f() { var a = 1; var a = 2; }")
    assert messages(session) == ["Already a variable with this name in this scope."]
    assert str(session.errors.diagnostics[0]) == \
        "[line 1] Error at 'a': Already a variable with this name in this scope."


def test_duplicate_parameter():
    session, _, _ = resolve("fun f(a, a) {}")
    assert messages(session) == ["Already a variable with this name in this scope."]


def test_return_at_top_level():
    session, _, _ = resolve("return 1;")
    assert messages(session) == ["Can't return from top-level code."]


def test_return_value_from_initializer():
    session, _, _ = resolve("class A { init() { return 1; } }")
    assert messages(session) == ["Can't return a value from an initializer."]


def test_bare_return_from_initializer_is_fine():
    session, _, _ = resolve("class A { init() { return; } }")
    assert not session.errors.had_error


def test_class_inheriting_from_itself():
    session, _, _ = resolve("class A : A {}")
    assert messages(session) == ["A class can't inherit from itself."]


def test_super_misuse():
    session, _, _ = resolve("super.f();\nclass A { f() { super.f(); } }")
    assert messages(session) == [
        "Can't use 'super' outside of a class.",
        "Can't use 'super' in a class with no superclass.",
    ]
    assert session.errors.diagnostics[1].line == 2


def test_this_outside_class():
    session, _, _ = resolve("print this;\nfun f() { return this; }")
    assert messages(session) == [
        "Can't use 'this' outside of a class.",
        "Can't use 'this' outside of a class.",
    ]


def test_resolution_error_prevents_execution(capsys):
    session = Session()
    code = session.run_source("print 1; { var a = a; }")
    assert code == ExitCode.STATIC_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Can't read local variable in its own initializer." in captured.err


def test_closure_binds_at_declaration(capsys):
    source = """
    var a = "global";
    {
      fun showA() { print a; }
      showA();
      var a = "block";
      showA();
    }
    """
    assert Session().run_source(source) == ExitCode.OK
    assert capsys.readouterr().out.split() == ["global", "global"]
