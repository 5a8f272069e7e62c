from lox.session import ExitCode, Session


def run(source, capsys):
    code = Session().run_source(source)
    captured = capsys.readouterr()
    return code, captured.out.splitlines(), captured.err


def test_class_and_instance_rendering(capsys):
    code, out, _ = run("class A {} print A; print A();", capsys)
    assert code == ExitCode.OK
    assert out == ["A", "A instance"]


def test_fields(capsys):
    code, out, err = run("class A {} var a = A(); a.x = 1; a.x = a.x + 1; print a.x; print a.y;", capsys)
    assert out == ["2"]
    assert code == ExitCode.RUNTIME_ERROR
    assert "Undefined property 'y'." in err


def test_property_access_on_non_instance(capsys):
    _, _, err = run("var n = 1; print n.x;", capsys)
    assert "Only instances have properties." in err
    _, _, err = run("var n = 1; n.x = 2;", capsys)
    assert "Only instances have fields." in err


def test_initializer(capsys):
    source = """
    class Point {
      init(x, y) { this.x = x; this.y = y; }
      sum() { return this.x + this.y; }
    }
    var p = Point(1, 2);
    print p.sum();
    print p.init(3, 4) == p;
    print p.sum();
    Point(1);
    """
    code, out, err = run(source, capsys)
    assert out == ["3", "true", "7"]
    assert code == ExitCode.RUNTIME_ERROR
    assert "Expected 2 arguments but got 1." in err


def test_early_return_in_initializer(capsys):
    _, out, _ = run("class P { init() { this.x = 1; return; this.x = 2; } } print P().x;", capsys)
    assert out == ["1"]


def test_bound_method_keeps_this(capsys):
    source = """
    class C { init(n) { this.n = n; } name() { return this.n; } }
    var m = C("c").name;
    print m();
    print m;
    """
    _, out, _ = run(source, capsys)
    assert out == ["c", "<fn name>"]


def test_fields_shadow_methods(capsys):
    _, out, _ = run('class C { m() { return "method"; } } var c = C(); c.m = "field"; print c.m;', capsys)
    assert out == ["field"]


def test_super_calls_superclass_method(capsys):
    source = """
    class A { method() { print "A method"; } }
    class B : A {
      method() { print "B method"; }
      test() { super.method(); }
    }
    class C : B {}
    C().test();
    """
    code, out, _ = run(source, capsys)
    assert code == ExitCode.OK
    assert out == ["A method"]


def test_super_binds_this_to_subclass_instance(capsys):
    source = """
    class Base { init(name) { this.name = name; } describe() { return "I am " + this.name; } }
    class Derived : Base {
      init(name) { super.init(name + "!"); }
      describe() { return super.describe() + " (derived)"; }
    }
    print Derived("d").describe();
    """
    _, out, _ = run(source, capsys)
    assert out == ["I am d! (derived)"]


def test_inherited_initializer(capsys):
    _, out, _ = run("class A { init(v) { this.v = v; } } class B : A {} print B(9).v;", capsys)
    assert out == ["9"]


def test_missing_super_method(capsys):
    code, _, err = run("class A {} class B : A { m() { return super.nope(); } } B().m();", capsys)
    assert code == ExitCode.RUNTIME_ERROR
    assert "Undefined property 'nope'." in err


def test_superclass_must_be_a_class(capsys):
    code, _, err = run("var NotAClass = 1;\nclass B : NotAClass {}", capsys)
    assert code == ExitCode.RUNTIME_ERROR
    assert "Superclass must be a class." in err
    assert "[line 2]" in err


def test_set_evaluates_target_then_value_once(capsys):
    source = """
    class Box {}
    var box = Box();
    var calls = 0;
    fun target() { calls = calls + 1; print "target"; return box; }
    fun value() { print "value"; return 5; }
    target().v = value();
    print box.v;
    print calls;
    """
    _, out, _ = run(source, capsys)
    assert out == ["target", "value", "5", "1"]


def test_postfix_on_field(capsys):
    _, out, _ = run("class C {} var c = C(); c.n = 1; print c.n++; print c.n;", capsys)
    assert out == ["1", "2"]
