from lox.ast_printer import AstPrinter
from lox.session import Session


def print_program(source):
    session = Session()
    statements = session.parse(source)
    assert not session.errors.had_error
    printer = AstPrinter()
    return [printer.print(stmt) for stmt in statements]


def test_statements():
    assert print_program("var a = 1; var b; { a; }") == [
        "(var a = 1)",
        "(var b)",
        "(block (; a))",
    ]


def test_control_flow():
    assert print_program("if (a) b; else c; while (x) { y; }") == [
        "(if-else a (; b) (; c))",
        "(while x (block (; y)))",
    ]


def test_functions_and_classes():
    assert print_program("fun add(a, b) { return a + b; } class B : A { m() { return this.x; } }") == [
        "(fun add (a b) (return (+ a b)))",
        "(class B : A (method m () (return (. this x))))",
    ]


def test_literals_and_super():
    assert print_program('print nil; print "s"; print 2.5; super.m;') == [
        "(; (call print nil))",
        '(; (call print "s"))',
        "(; (call print 2.5))",
        "(; (super m))",
    ]
