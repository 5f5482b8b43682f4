import logging
from typing import Dict, List, Optional, Sequence
from exprlang.lexer import Lexer
from exprlang.tokenizer import Lexeme, LexemeTypes as LT, OperationTypes as OP, ControlTypes as CT
from exprlang.exceptions import (
    InvalidSyntaxError,
    ParameterNotFoundError,
    FunctionNotFoundError,
    ArgumentNumberMismatchError,
)
from exprlang.ast import (
    AST,
    Program,
    BinOp,
    Num,
    Var,
    Function,
    FunctionCall,
    FunctionSignature,
    IfCondition,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ASTParser:
    """
    Two-pass parser over a list of source lines.

    Every line but the last holds one function definition; the last line is
    the program's expression. The first pass collects the function
    signatures so that the second pass can resolve calls to functions
    declared further down. Names are resolved to indices here, so the
    resulting tree never needs a name lookup at run time.
    """

    def __init__(self, lines: Sequence[str]):
        self._lines: List[str] = list(lines)
        self._lexer: Optional[Lexer] = None
        self._line_no = 0
        self._current: Optional[Lexeme] = None

        self._signatures: List[FunctionSignature] = []
        self._functions: Dict[str, int] = {}
        self._variables: Dict[str, int] = {}

    @property
    def current_lexeme(self) -> Optional[Lexeme]:
        return self._current

    @property
    def line_no(self) -> int:
        return self._line_no

    def _error(self, reason: str):
        raise InvalidSyntaxError(reason, self._line_no)

    def _start_line(self, line_no: int) -> None:
        self._line_no = line_no
        self._lexer = Lexer(self._lines[line_no - 1], line_no)
        self._advance()

    def _advance(self) -> bool:
        self._current = self._lexer.get_next_lexeme()
        return self._current is not None

    def _is_control(self, kind: CT) -> bool:
        return self._current is not None and self._current.is_control(kind)

    def _is_operation(self, kind: OP) -> bool:
        return self._current is not None and self._current.is_operation(kind)

    def _eat_control(self, kind: CT) -> None:
        if not self._is_control(kind):
            self._error(f"expected '{kind.symbol}', got {self._describe_current()}")
        self._advance()

    def _eat_operation(self, kind: OP) -> None:
        if not self._is_operation(kind):
            self._error(f"expected '{kind.symbol}', got {self._describe_current()}")
        self._advance()

    def _eat_identifier(self) -> str:
        curr = self._current
        if curr is None or curr.type != LT.IDENTIFIER:
            self._error(f"expected an identifier, got {self._describe_current()}")
        self._advance()
        return curr.value

    def _eat_literal(self) -> int:
        curr = self._current
        if curr is None or curr.type != LT.LITERAL:
            self._error(f"expected a number, got {self._describe_current()}")
        self._advance()
        return curr.value

    def _eat_operation_type(self) -> OP:
        curr = self._current
        if curr is None or curr.type != LT.OPERATION:
            self._error(f"expected an operation, got {self._describe_current()}")
        self._advance()
        return curr.value

    def _end_of_line(self) -> None:
        if self._current is not None:
            self._error(f"unexpected trailing {self._describe_current()}")

    def _describe_current(self) -> str:
        curr = self._current
        if curr is None:
            return "end of line"
        if curr.type in (LT.OPERATION, LT.CONTROL):
            return f"'{curr.value.symbol}'"
        return f"'{curr.value}'"

    # <expression> ::= <identifier> | <constant> | <binary> | <if> | <call>
    def expression(self) -> AST:
        curr = self._current
        if curr is None:
            self._error("expected an expression, got end of line")
        elif curr.type == LT.OPERATION:
            return self.negative_literal()
        elif curr.type == LT.CONTROL:
            if curr.value == CT.OPEN_PARENTHESIS:
                return self.binary()
            elif curr.value == CT.OPEN_BRACKET:
                return self.if_condition()
            self._error(f"unexpected {self._describe_current()}")
        elif curr.type == LT.IDENTIFIER:
            return self.identifier_or_call()
        return self.literal()

    # <number>
    def literal(self) -> AST:
        line = self._line_no
        return Num(self._eat_literal(), line)

    # "-" <number>
    def negative_literal(self) -> AST:
        line = self._line_no
        self._eat_operation(OP.SUBTRACT)
        return Num(-self._eat_literal(), line)

    # "(" <expression> <operation> <expression> ")"
    def binary(self) -> AST:
        line = self._line_no
        self._eat_control(CT.OPEN_PARENTHESIS)
        left = self.expression()
        op = self._eat_operation_type()
        right = self.expression()
        self._eat_control(CT.CLOSE_PARENTHESIS)
        return BinOp(op, left, right, line)

    # "[" <expression> "]" "?" "{" <expression> "}" ":" "{" <expression> "}"
    def if_condition(self) -> AST:
        line = self._line_no
        self._eat_control(CT.OPEN_BRACKET)
        condition = self.expression()
        self._eat_control(CT.CLOSE_BRACKET)

        self._eat_control(CT.QUESTION)
        self._eat_control(CT.OPEN_BRACE)
        then_branch = self.expression()
        self._eat_control(CT.CLOSE_BRACE)

        self._eat_control(CT.COLON)
        self._eat_control(CT.OPEN_BRACE)
        else_branch = self.expression()
        self._eat_control(CT.CLOSE_BRACE)
        return IfCondition(condition, then_branch, else_branch, line)

    # <identifier> | <identifier> "(" <call_args> ")"
    def identifier_or_call(self) -> AST:
        line = self._line_no
        name = self._eat_identifier()
        if self._is_control(CT.OPEN_PARENTHESIS):
            return self.function_call(name, line)

        slot = self._variables.get(name)
        if slot is None:
            raise ParameterNotFoundError(name, line)
        return Var(name, slot, line)

    def function_call(self, name: str, line: int) -> AST:
        index = self._functions.get(name)
        if index is None:
            raise FunctionNotFoundError(name, line)
        args = self.call_args()
        if len(args) != self._signatures[index].arity:
            raise ArgumentNumberMismatchError(name, line)
        return FunctionCall(name, index, args, line)

    # "(" [<expression> ("," <expression>)*] ")"
    def call_args(self) -> List[AST]:
        args = []
        self._eat_control(CT.OPEN_PARENTHESIS)
        if not self._is_control(CT.CLOSE_PARENTHESIS):
            args.append(self.expression())
            while not self._is_control(CT.CLOSE_PARENTHESIS):
                self._eat_control(CT.COMMA)
                args.append(self.expression())
        self._eat_control(CT.CLOSE_PARENTHESIS)
        return args

    # <identifier> "(" [<identifier> ("," <identifier>)*] ")"
    def signature(self) -> FunctionSignature:
        name = self._eat_identifier()
        params = []
        self._eat_control(CT.OPEN_PARENTHESIS)
        if not self._is_control(CT.CLOSE_PARENTHESIS):
            params.append(self._eat_identifier())
            while not self._is_control(CT.CLOSE_PARENTHESIS):
                self._eat_control(CT.COMMA)
                params.append(self._eat_identifier())
        self._eat_control(CT.CLOSE_PARENTHESIS)
        return FunctionSignature(name, params)

    def signatures(self) -> List[FunctionSignature]:
        signatures = []
        for line_no in range(1, len(self._lines)):
            self._start_line(line_no)
            signatures.append(self.signature())
        return signatures

    # <signature> "=" "{" <expression> "}"
    def function(self, signature: FunctionSignature) -> Function:
        while not self._is_operation(OP.EQUAL):
            if not self._advance():
                self._error(f"missing body for function '{signature.name}'")
        self._eat_operation(OP.EQUAL)
        self._eat_control(CT.OPEN_BRACE)

        self._variables = {}
        for slot, param in enumerate(signature.params):
            if param in self._variables:
                self._error(f"duplicate parameter '{param}' in function '{signature.name}'")
            self._variables[param] = slot

        body = self.expression()
        self._eat_control(CT.CLOSE_BRACE)
        self._end_of_line()
        return Function(signature, body)

    def program(self) -> Program:
        if not self._lines:
            raise InvalidSyntaxError("empty input")

        # first pass: function signatures only
        self._signatures = self.signatures()
        self._functions = {}
        for index, signature in enumerate(self._signatures):
            if signature.name in self._functions:
                raise InvalidSyntaxError(
                    f"duplicate function '{signature.name}'", index + 1
                )
            self._functions[signature.name] = index
        logger.debug(
            "collected %d function signature(s): %s",
            len(self._signatures),
            ", ".join(s.name for s in self._signatures),
        )

        # second pass: bodies, then the program expression
        functions = []
        for index, signature in enumerate(self._signatures):
            self._start_line(index + 1)
            functions.append(self.function(signature))
            logger.debug("parsed function %s/%d", signature.name, signature.arity)

        self._variables = {}
        self._start_line(len(self._lines))
        body = self.expression()
        self._end_of_line()
        return Program(functions, body)


def parse(lines: Sequence[str]) -> Program:
    return ASTParser(lines).program()
