from lox.ast import Block, Call, Expression, Function, If, Var, Variable, While
from lox.ast_printer import AstPrinter
from lox.session import Session


def parse(source):
    session = Session()
    return session, session.parse(source)


def print_expr(source):
    session, statements = parse(source)
    assert not session.errors.had_error
    return AstPrinter().print_expr(statements[0].expression)


def messages(session):
    return [d.message for d in session.errors.diagnostics]


def test_precedence():
    assert print_expr("1 + 2 * 3 - 4;") == "(- (+ 1 (* 2 3)) 4)"
    assert print_expr("-123 * (45.67);") == "(* (- 123) (group 45.67))"
    assert print_expr("1 < 2 == 3 >= 4;") == "(== (< 1 2) (>= 3 4))"
    assert print_expr("a or b and c;") == "(or a (and b c))"
    assert print_expr("!!true;") == "(! (! true))"


def test_right_associative_forms():
    assert print_expr("a = b = c;") == "(= a (= b c))"
    assert print_expr("a ? b : c ? d : e;") == "(?: a b (?: c d e))"


def test_calls_properties_and_postfix():
    assert print_expr("a.b(1, \"s\").c;") == '(. (call (. a b) 1 "s") c)'
    assert print_expr("a.b = 1;") == "(= a b 1)"
    assert print_expr("x++;") == "(post++ x)"
    assert print_expr("o.n--;") == "(post-- (. o n))"


def test_print_shorthand_is_a_call():
    session, statements = parse("print 1; print(2); print;")
    assert not session.errors.had_error
    first, second, third = statements
    assert isinstance(first.expression, Call)
    assert first.expression.callee.name.lexeme == "print"
    assert isinstance(second.expression, Call)
    assert isinstance(third.expression, Variable)


def test_for_loop_desugars_to_while():
    session, statements = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    assert not session.errors.had_error
    [outer] = statements
    assert isinstance(outer, Block)
    init, loop = outer.statements
    assert isinstance(init, Var)
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    body, increment = loop.body.statements
    assert isinstance(body, Expression)
    assert AstPrinter().print(increment) == "(; (= i (+ i 1)))"


def test_for_loop_without_clauses():
    session, statements = parse("for (;;) {}")
    assert not session.errors.had_error
    [loop] = statements
    assert isinstance(loop, While)
    assert loop.condition.value is True


def test_class_with_superclass():
    session, statements = parse("class B : A { init(x) { this.x = x; } get() { return this.x; } }")
    assert not session.errors.had_error
    [klass] = statements
    assert klass.superclass.name.lexeme == "A"
    assert [m.name.lexeme for m in klass.methods] == ["init", "get"]
    assert all(isinstance(m, Function) for m in klass.methods)


def test_invalid_assignment_target_is_reported_not_thrown():
    session, statements = parse("1 = 2; a + b = c;")
    assert messages(session) == ["Invalid assignment target.", "Invalid assignment target."]
    assert str(session.errors.diagnostics[0]) == "[line 1] Error at '=': Invalid assignment target."
    assert len(statements) == 2


def test_ternary_rejected_as_condition():
    session, statements = parse("if (a ? b : c) print 1;\nwhile (x ? y : z) {}\nvar done = 2;")
    assert messages(session) == [
        "Ternary expression cannot be used as a condition.",
        "Ternary expression cannot be used as a condition.",
    ]
    assert str(session.errors.diagnostics[0]) == "[line 1] Error at '?': Ternary expression cannot be used as a condition."
    assert len(statements) == 2
    assert isinstance(statements[-1], Var)


def test_ternary_allowed_inside_grouping_elsewhere():
    session, statements = parse("var x = a ? 1 : 2;")
    assert not session.errors.had_error
    assert isinstance(statements[0], Var)


def test_synchronize_after_error():
    session, statements = parse("var = 1;\nprint 2;\nvar ok = 3;")
    assert messages(session) == ["Expect variable name."]
    assert len(statements) == 2
    assert isinstance(statements[1], Var)


def test_error_at_end():
    session, statements = parse("print 1")
    assert [str(d) for d in session.errors.diagnostics] == ["[line 1] Error at end: Expect ';' after value."]


def test_missing_expression():
    session, _ = parse("var a = ;")
    assert str(session.errors.diagnostics[0]) == "[line 1] Error at ';': Expect expression."


def test_if_else_binds_nearest():
    session, statements = parse("if (a) if (b) x; else y;")
    [outer] = statements
    assert outer.else_branch is None
    assert isinstance(outer.then_branch, If)
    assert outer.then_branch.else_branch is not None


def test_argument_limit_is_reported_but_not_fatal():
    args = ", ".join(["1"] * 256)
    session, statements = parse(f"f({args});")
    assert messages(session) == ["Can't have more than 255 arguments."]
    assert len(statements[0].expression.arguments) == 256


def test_parameter_limit():
    params = ", ".join(f"p{i}" for i in range(256))
    session, statements = parse(f"fun f({params}) {{}}")
    assert messages(session) == ["Can't have more than 255 parameters."]
    assert len(statements[0].params) == 256


def test_invalid_increment_target():
    session, _ = parse("1++;")
    assert messages(session) == ["Invalid increment target."]


def test_ternary_rejected_as_for_condition():
    session, statements = parse("for (; a ? b : c;) {}\nvar after = 1;")
    assert messages(session)[0] == "Ternary expression cannot be used as a condition."
    assert isinstance(statements[-1], Var)
    assert statements[-1].name.lexeme == "after"


def test_grouped_ternary_rejected_as_condition():
    session, _ = parse("if ((true ? false : true)) print 1;")
    assert messages(session) == ["Ternary expression cannot be used as a condition."]


def test_synchronize_stops_before_print():
    session, statements = parse("var = 1 print 2;\nvar ok;")
    assert messages(session) == ["Expect variable name."]
    assert len(statements) == 2
    assert isinstance(statements[0].expression, Call)


def test_print_with_parenthesized_operand_takes_whole_expression():
    assert print_expr("print (2 + 3) * 4;") == "(call print (* (group (+ 2 3)) 4))"
