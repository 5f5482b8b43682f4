import logging
import sys
import threading
from typing import Callable, List, Optional, Sequence, Tuple
from exprlang.tokenizer import OperationTypes as OP
from exprlang.ast import (
    AST,
    Program,
    Num,
    Var,
    BinOp,
    Function,
    FunctionCall,
    IfCondition,
)
from exprlang.exceptions import RuntimeDivisionError
from exprlang.printer import to_code

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# each language call nests about five visitor frames
RECURSION_LIMIT = 100_000
STACK_SIZE = 256 * 1024 * 1024


def truncated_div(left: int, right: int) -> int:
    # rounds toward zero, unlike //
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncated_mod(left: int, right: int) -> int:
    return left - right * truncated_div(left, right)


def run_with_deep_stack(func: Callable[[], int], recursion_limit: int = RECURSION_LIMIT) -> int:
    """
    Runs `func` on a worker thread with a large stack and a raised recursion
    limit, so that deep but terminating recursion in evaluated programs does
    not hit the interpreter's default limit. Both settings are restored
    afterwards; exceptions raised by `func` are re-raised in the caller.
    """
    outcome = {}

    def target():
        try:
            outcome["result"] = func()
        except BaseException as e:
            outcome["error"] = e

    old_limit = sys.getrecursionlimit()
    old_stack_size = threading.stack_size()
    sys.setrecursionlimit(max(old_limit, recursion_limit))
    try:
        threading.stack_size(STACK_SIZE)
        worker = threading.Thread(target=target, name="exprlang-evaluate")
        worker.start()
        worker.join()
    finally:
        threading.stack_size(old_stack_size)
        sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]


class FunctionFrame:
    def __init__(self, func: Function, args: Sequence[int]):
        self.func: Function = func
        self.args: Tuple[int, ...] = tuple(args)

    def __repr__(self):
        return f"{FunctionFrame.__name__}({self.func.name}, {list(self.args)})"

    def __str__(self):
        return repr(self)


class ASTVisitor:
    def __init__(self, program_node: Program, recursion_limit: Optional[int] = None):
        self._program: Program = program_node
        self._call_stack: List[FunctionFrame] = []
        self._recursion_limit = recursion_limit or RECURSION_LIMIT

    @property
    def program(self):
        return self._program

    @property
    def call_stack(self):
        return tuple(self._call_stack)

    @property
    def frame(self) -> FunctionFrame:
        return self._call_stack[-1]

    def visit_Num(self, node: Num) -> int:
        return node.value

    def visit_Var(self, node: Var) -> int:
        return self.frame.args[node.slot]

    def visit_BinOp(self, node: BinOp) -> int:
        left = self.visit(node.left)
        right = self.visit(node.right)
        op = node.op
        if op == OP.ADD:
            return left + right
        elif op == OP.SUBTRACT:
            return left - right
        elif op == OP.MULTIPLY:
            return left * right
        elif op == OP.DIVIDE:
            if right == 0:
                raise RuntimeDivisionError(to_code(node), node.line)
            return truncated_div(left, right)
        elif op == OP.MODULO:
            # not guarded: a zero divisor surfaces as ZeroDivisionError
            return truncated_mod(left, right)
        elif op == OP.GREATER:
            return 1 if left > right else 0
        elif op == OP.LESS:
            return 1 if left < right else 0
        return 1 if left == right else 0

    def visit_IfCondition(self, node: IfCondition) -> int:
        if self.visit(node.condition) != 0:
            return self.visit(node.then_branch)
        return self.visit(node.else_branch)

    def visit_FunctionCall(self, node: FunctionCall) -> int:
        args = [self.visit(arg) for arg in node.args]
        callee_func = self._program.functions[node.function_index]

        self._call_stack.append(FunctionFrame(callee_func, args))
        try:
            return self.visit(callee_func.body)
        finally:
            self._call_stack.pop()

    def visit(self, node: AST) -> int:
        if type(node) is Num:
            return self.visit_Num(node)
        elif type(node) is BinOp:
            return self.visit_BinOp(node)
        elif type(node) is IfCondition:
            return self.visit_IfCondition(node)
        elif type(node) is Var:
            return self.visit_Var(node)
        elif type(node) is FunctionCall:
            return self.visit_FunctionCall(node)
        raise TypeError(f"cannot evaluate {type(node).__name__}")

    def visit_Program(self) -> int:
        logger.debug(
            "evaluating program with %d function(s)", len(self._program.functions)
        )
        result = run_with_deep_stack(
            lambda: self.visit(self._program.body), self._recursion_limit
        )
        logger.debug("program evaluated to %d", result)
        return result


def evaluate(program: Program, recursion_limit: Optional[int] = None) -> int:
    return ASTVisitor(program, recursion_limit).visit_Program()
