class ExprlangError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class LexicalError(ExprlangError):
    def __init__(self, symbol, line):
        self.symbol = symbol
        self.line = line
        super().__init__(f"LEXICAL ERROR {symbol!r}:{line}")


class ParserError(ExprlangError):
    pass


class InvalidSyntaxError(ParserError):
    def __init__(self, reason, line=None):
        self.reason = reason
        self.line = line
        super().__init__("SYNTAX ERROR")


class ParameterNotFoundError(ParserError):
    def __init__(self, name, line):
        self.name = name
        self.line = line
        super().__init__(f"PARAMETER NOT FOUND {name}:{line}")


class FunctionNotFoundError(ParserError):
    def __init__(self, name, line):
        self.name = name
        self.line = line
        super().__init__(f"FUNCTION NOT FOUND {name}:{line}")


class ArgumentNumberMismatchError(ParserError):
    def __init__(self, name, line):
        self.name = name
        self.line = line
        super().__init__(f"ARGUMENT NUMBER MISMATCH {name}:{line}")


class InterpreterError(ExprlangError):
    pass


class RuntimeDivisionError(InterpreterError):
    def __init__(self, expression, line):
        self.expression = expression
        self.line = line
        super().__init__(f"RUNTIME ERROR {expression}:{line}")
