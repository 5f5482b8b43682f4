###############################################################################
#  AST printer - rebuilds source text from a parsed tree.                     #
#                                                                             #
#  The output is canonical: parsing it back gives an equal tree.              #
#                                                                             #
###############################################################################
from typing import List, Union
from exprlang.ast import (
    AST,
    BinOp,
    Function,
    FunctionCall,
    IfCondition,
    Num,
    Program,
    Var,
)


class ASTPrinter:
    def visitAST(self, node: Union[AST, Function, Program]) -> str:
        if isinstance(node, Num):
            return str(node.value)
        elif isinstance(node, BinOp):
            return f"({self.visitAST(node.left)}{node.op.symbol}{self.visitAST(node.right)})"
        elif isinstance(node, IfCondition):
            condition = self.visitAST(node.condition)
            then_branch = self.visitAST(node.then_branch)
            else_branch = self.visitAST(node.else_branch)
            return f"[{condition}]?{{{then_branch}}}:{{{else_branch}}}"
        elif isinstance(node, Var):
            return node.name
        elif isinstance(node, FunctionCall):
            args = ",".join(self.visitAST(arg) for arg in node.args)
            return f"{node.name}({args})"
        elif isinstance(node, Function):
            params = ",".join(node.signature.params)
            return f"{node.name}({params})={{{self.visitAST(node.body)}}}"
        elif isinstance(node, Program):
            return "\n".join(self.lines(node))
        raise TypeError(f"cannot print {type(node).__name__}")

    def lines(self, program: Program) -> List[str]:
        lines = [self.visitAST(function) for function in program.functions]
        lines.append(self.visitAST(program.body))
        return lines


def to_code(node: Union[AST, Function, Program]) -> str:
    return ASTPrinter().visitAST(node)
