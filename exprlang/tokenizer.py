from typing import Union, Optional
from enum import Enum, auto


class AutoName(Enum):
    def _generate_next_value_(name, start, count, last_values):
        return name


class LexemeTypes(AutoName):
    LITERAL = auto()
    IDENTIFIER = auto()
    OPERATION = auto()
    CONTROL = auto()


class OperationTypes(Enum):
    """
    Values are the source spelling of each operation
    """

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    GREATER = ">"
    LESS = "<"
    EQUAL = "="

    @property
    def symbol(self) -> str:
        return self.value


class ControlTypes(Enum):
    OPEN_PARENTHESIS = "("
    CLOSE_PARENTHESIS = ")"
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    QUESTION = "?"
    COLON = ":"
    COMMA = ","
    EOL = "\n"

    @property
    def symbol(self) -> str:
        return self.value


LexemeValue = Union[int, str, OperationTypes, ControlTypes]


class Lexeme:
    def __init__(self, type: LexemeTypes, value: LexemeValue, line: int = 1):
        if not isinstance(type, LexemeTypes):
            raise TypeError(f"invalid lexeme type: {type}")
        if value is None:
            raise ValueError(f"value shouldn't be None for {type}")
        self._validate_value(type, value)
        if not isinstance(line, int) or isinstance(line, bool) or line < 1:
            raise ValueError(f"line should be a positive integer, got {line!r}")

        self._type = type
        self._value = value
        self._line = line

    def _validate_value(self, lexeme_type: LexemeTypes, value: LexemeValue):
        if lexeme_type == LexemeTypes.LITERAL and (
            not isinstance(value, int) or isinstance(value, bool) or value < 0
        ):
            raise TypeError("value for LITERAL must be a non-negative integer")
        elif lexeme_type == LexemeTypes.IDENTIFIER and (
            not isinstance(value, str)
            or not value
            or not all(c.isascii() and (c.isalpha() or c == "_") for c in value)
        ):
            raise TypeError("value for IDENTIFIER must be a string of letters and underscores")
        elif lexeme_type == LexemeTypes.OPERATION and not isinstance(value, OperationTypes):
            raise TypeError("value for OPERATION must be an OperationTypes member")
        elif lexeme_type == LexemeTypes.CONTROL and not isinstance(value, ControlTypes):
            raise TypeError("value for CONTROL must be a ControlTypes member")

    @property
    def type(self) -> LexemeTypes:
        return self._type

    @property
    def value(self) -> LexemeValue:
        return self._value

    @property
    def line(self) -> int:
        return self._line

    def is_operation(self, kind: Optional[OperationTypes] = None) -> bool:
        if self._type != LexemeTypes.OPERATION:
            return False
        return kind is None or self._value == kind

    def is_control(self, kind: Optional[ControlTypes] = None) -> bool:
        if self._type != LexemeTypes.CONTROL:
            return False
        return kind is None or self._value == kind

    def __str__(self) -> str:
        return f"Lexeme({self._type}, {self._value!r}, line={self._line})"

    def __repr__(self) -> str:
        return self.__str__()

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        if (self._type, self._value, self._line) != (other._type, other._value, other._line):
            return False
        return True

    def __hash__(self):
        return hash((self._type, self._value, self._line))
