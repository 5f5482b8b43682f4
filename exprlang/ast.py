from typing import List, Sequence
from exprlang.tokenizer import OperationTypes


class AST(object):
    def __init__(self, line: int):
        self._line = line

    @property
    def line(self) -> int:
        return self._line

    def __str__(self):
        return f"AST()"

    def __repr__(self):
        return str(self)


class Num(AST):
    def __init__(self, value: int, line: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"invalid value {value!r} for {Num.__name__}")
        super().__init__(line)
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __str__(self):
        return f"{Num.__name__}({self._value})"

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._value, self._line) == (other.value, other.line)


class BinOp(AST):
    def __init__(self, op: OperationTypes, left: AST, right: AST, line: int):
        if not isinstance(op, OperationTypes):
            raise TypeError(f"invalid operation {op} for {BinOp.__name__}")
        super().__init__(line)
        self._op = op
        self._left, self._right = left, right

    @property
    def op(self) -> OperationTypes:
        return self._op

    @property
    def left(self) -> AST:
        return self._left

    @property
    def right(self) -> AST:
        return self._right

    def __str__(self):
        return f"{BinOp.__name__}({self._op}, {self._left}, {self._right})"

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._op, self._left, self._right, self._line) == (
            other.op,
            other.left,
            other.right,
            other.line,
        )


class IfCondition(AST):
    def __init__(self, condition: AST, then_branch: AST, else_branch: AST, line: int):
        super().__init__(line)
        self._condition = condition
        self._then_branch = then_branch
        self._else_branch = else_branch

    @property
    def condition(self) -> AST:
        return self._condition

    @property
    def then_branch(self) -> AST:
        return self._then_branch

    @property
    def else_branch(self) -> AST:
        return self._else_branch

    def __str__(self):
        return f"{IfCondition.__name__}({self._condition}, {self._then_branch}, {self._else_branch})"

    def __eq__(self, other):
        return type(self) == type(other) and (
            self._condition,
            self._then_branch,
            self._else_branch,
            self._line,
        ) == (other.condition, other.then_branch, other.else_branch, other.line)


class Var(AST):
    """
    A parameter reference. `slot` is the parameter's position in the frame of
    the function whose body contains this node.
    """

    def __init__(self, name: str, slot: int, line: int):
        super().__init__(line)
        self._name = name
        self._slot = slot

    @property
    def name(self) -> str:
        return self._name

    @property
    def slot(self) -> int:
        return self._slot

    def __str__(self):
        return f"{Var.__name__}({self._name}, {self._slot})"

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._name, self._slot, self._line) == (other.name, other.slot, other.line)


class FunctionCall(AST):
    def __init__(self, name: str, function_index: int, args: Sequence[AST], line: int):
        super().__init__(line)
        self._name = name
        self._function_index = function_index
        self._args = tuple(args)

    @property
    def name(self) -> str:
        return self._name

    @property
    def function_index(self) -> int:
        return self._function_index

    @property
    def args(self):
        return self._args

    def __str__(self):
        return f"{FunctionCall.__name__}({self._name}, {self._function_index}, {list(self._args)})"

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._name, self._function_index, self._args, self._line) == (
            other.name,
            other.function_index,
            other.args,
            other.line,
        )


class FunctionSignature:
    def __init__(self, name: str, params: Sequence[str]):
        self._name = name
        self._params = tuple(params)

    @property
    def name(self) -> str:
        return self._name

    @property
    def params(self):
        return self._params

    @property
    def arity(self) -> int:
        return len(self._params)

    def __str__(self):
        return f"{FunctionSignature.__name__}({self._name}, {list(self._params)})"

    def __repr__(self):
        return str(self)

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._name, self._params) == (other.name, other.params)


class Function:
    def __init__(self, signature: FunctionSignature, body: AST):
        self._signature = signature
        self._body = body

    @property
    def signature(self) -> FunctionSignature:
        return self._signature

    @property
    def name(self) -> str:
        return self._signature.name

    @property
    def body(self) -> AST:
        return self._body

    def __str__(self):
        return f"{Function.__name__}({self._signature}, {self._body})"

    def __repr__(self):
        return str(self)

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._signature, self._body) == (other.signature, other.body)


class Program:
    def __init__(self, functions: List[Function], body: AST):
        self._functions = tuple(functions)
        self._body = body

    @property
    def functions(self):
        return self._functions

    @property
    def body(self) -> AST:
        return self._body

    def __str__(self):
        return f"{Program.__name__}({list(self._functions)}, {self._body})"

    def __repr__(self):
        return str(self)

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return (self._functions, self._body) == (other.functions, other.body)
