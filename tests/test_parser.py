from pytest import raises
from exprlang.tokenizer import OperationTypes as OP
from exprlang.parser import ASTParser, parse
from exprlang.ast import (
    BinOp,
    Function,
    FunctionCall,
    FunctionSignature,
    IfCondition,
    Num,
    Program,
    Var,
)
from exprlang.exceptions import (
    ArgumentNumberMismatchError,
    FunctionNotFoundError,
    InvalidSyntaxError,
    LexicalError,
    ParameterNotFoundError,
    ParserError,
)


def test_literal():
    program = parse(["42"])
    assert program == Program([], Num(42, 1))

    program = parse(["-42"])
    assert program.body == Num(-42, 1)


def test_negative_literal_only():
    with raises(InvalidSyntaxError):
        parse(["+42"])

    with raises(InvalidSyntaxError):
        parse(["-(1+2)"])

    with raises(InvalidSyntaxError):
        parse(["--4"])


def test_binary():
    program = parse(["(2+((3*4)/5))"])
    assert program.body == BinOp(
        OP.ADD,
        Num(2, 1),
        BinOp(OP.DIVIDE, BinOp(OP.MULTIPLY, Num(3, 1), Num(4, 1), 1), Num(5, 1), 1),
        1,
    )

    program = parse(["(-1%-2)"])
    assert program.body == BinOp(OP.MODULO, Num(-1, 1), Num(-2, 1), 1)


def test_if_condition():
    program = parse(["[((10+20)>(20+10))]?{1}:{0}"])
    assert program.body == IfCondition(
        BinOp(
            OP.GREATER,
            BinOp(OP.ADD, Num(10, 1), Num(20, 1), 1),
            BinOp(OP.ADD, Num(20, 1), Num(10, 1), 1),
            1,
        ),
        Num(1, 1),
        Num(0, 1),
        1,
    )


def test_function_definitions():
    program = parse(
        [
            "g(x)={(f(x)+f((x/2)))}",
            "f(x)={[(x>1)]?{(f((x-1))+f((x-2)))}:{x}}",
            "g(10)",
        ]
    )
    assert [f.signature for f in program.functions] == [
        FunctionSignature("g", ["x"]),
        FunctionSignature("f", ["x"]),
    ]
    assert program.functions[0] == Function(
        FunctionSignature("g", ["x"]),
        BinOp(
            OP.ADD,
            FunctionCall("f", 1, [Var("x", 0, 1)], 1),
            FunctionCall("f", 1, [BinOp(OP.DIVIDE, Var("x", 0, 1), Num(2, 1), 1)], 1),
            1,
        ),
    )
    assert program.body == FunctionCall("g", 0, [Num(10, 3)], 3)


def test_parameter_slots():
    program = parse(["h(n,y,z)={(z-n)}", "h(1,2,3)"])
    assert program.functions[0].body == BinOp(
        OP.SUBTRACT, Var("z", 2, 1), Var("n", 0, 1), 1
    )

    # parameter names only need to be unique within one signature
    program = parse(["f(a,b)={b}", "g(b,a)={f(a,b)}", "g(1,2)"])
    assert program.functions[0].body == Var("b", 1, 1)
    assert program.functions[1].body == FunctionCall(
        "f", 0, [Var("a", 1, 2), Var("b", 0, 2)], 2
    )


def test_function_without_params():
    program = parse(["seven()={7}", "seven()"])
    assert program.functions[0].signature.arity == 0
    assert program.body == FunctionCall("seven", 0, [], 2)


def test_empty_input():
    with raises(InvalidSyntaxError):
        parse([])


def test_invalid_syntax():
    # no surrounding parenthesis
    with raises(InvalidSyntaxError):
        parse(["2+2"])

    # no function body
    with raises(InvalidSyntaxError):
        parse(["g(x)", "g(10)"])

    # first line is not a function signature
    with raises(InvalidSyntaxError):
        parse(["g(10)", "g(10)"])

    # double ?
    with raises(InvalidSyntaxError):
        parse(["[0]?{1}?{0}"])

    with raises(InvalidSyntaxError):
        parse(["(1+)"])

    with raises(InvalidSyntaxError):
        parse(["(12)"])

    with raises(InvalidSyntaxError):
        parse([""])

    with raises(InvalidSyntaxError):
        parse(["{1}"])

    with raises(InvalidSyntaxError):
        parse(["f(x)={x}", "f(1,)"])


def test_trailing_lexemes():
    with raises(InvalidSyntaxError):
        parse(["(1+2))"])

    with raises(InvalidSyntaxError):
        parse(["f(x)={x}}", "f(1)"])

    with raises(InvalidSyntaxError):
        parse(["1", "2"])


def test_signature_prefix_is_skipped():
    # everything before the first '=' is skipped by the second pass
    program = parse(["f(x)junk={x}", "f(3)"])
    assert program.functions[0] == Function(FunctionSignature("f", ["x"]), Var("x", 0, 1))


def test_duplicate_parameter():
    with raises(InvalidSyntaxError):
        parse(["f(x,y,x)={x}", "f(1,2,3)"])


def test_duplicate_function():
    with raises(InvalidSyntaxError) as e:
        parse(["f(x)={x}", "f(y)={y}", "f(1)"])
    assert e.value.line == 2


def test_duplicate_function_detected_before_bodies():
    # the body of the first line would raise FunctionNotFoundError
    with raises(InvalidSyntaxError):
        parse(["f(x)={missing(x)}", "f(y)={y}", "f(1)"])


def test_parameter_not_found():
    with raises(ParameterNotFoundError) as e:
        parse(
            [
                "calculate_square(num_rows,num_cols)={(num_row*num_cols)}",
                "calculate_square(3,4)",
            ]
        )
    assert (e.value.name, e.value.line) == ("num_row", 1)
    assert str(e.value) == "PARAMETER NOT FOUND num_row:1"

    # the program expression has no parameters
    with raises(ParameterNotFoundError):
        parse(["f(x)={x}", "x"])


def test_function_not_found():
    with raises(FunctionNotFoundError) as e:
        parse(
            [
                "get_imdb_rating(film_number)={9}",
                "get_film_number()={7}",
                "get_imbd_rating(get_film_number())",
            ]
        )
    assert (e.value.name, e.value.line) == ("get_imbd_rating", 3)
    assert str(e.value) == "FUNCTION NOT FOUND get_imbd_rating:3"


def test_argument_number_mismatch():
    with raises(ArgumentNumberMismatchError) as e:
        parse(
            [
                "foo(a,b,c,d,e,f,g,h)={137}",
                "bar(a,b,c,d,e,f,g,h)={foo(a,b,c,d,e,f,h)}",
                "bar(1,2,3,4,5,6,7,8)",
            ]
        )
    assert (e.value.name, e.value.line) == ("foo", 2)
    assert str(e.value) == "ARGUMENT NUMBER MISMATCH foo:2"

    with raises(ArgumentNumberMismatchError):
        parse(["f(x)={x}", "f(1,2)"])


def test_lexical_error_propagates():
    with raises(LexicalError):
        parse(["f(x)={x}", "f(1) "])


def test_error_hierarchy():
    for lines in (["2+2"], ["x"], ["f()"], ["f(x)={x}", "f()"]):
        with raises(ParserError):
            parse(lines)


def test_parser_state():
    parser = ASTParser(["f(a,b)={(a+b)}", "f(1,2)"])
    program = parser.program()
    assert parser.current_lexeme is None
    assert parser.line_no == 2
    assert program == ASTParser(["f(a,b)={(a+b)}", "f(1,2)"]).program()


def test_expression_dispatch():
    assert parse(["7"]).body == Num(7, 1)
    assert parse(["-7"]).body == Num(-7, 1)
    assert parse(["f(a)={a}", "f(1)"]).functions[0].body == Var("a", 0, 1)
    with raises(InvalidSyntaxError):
        parse(["?"])
    with raises(InvalidSyntaxError):
        parse(["*7"])
