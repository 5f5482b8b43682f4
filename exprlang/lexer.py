from typing import Iterator, List, Optional
from exprlang.tokenizer import Lexeme, LexemeTypes, OperationTypes, ControlTypes
from exprlang.exceptions import LexicalError


operation_chr_toks = {op.symbol: op for op in OperationTypes}

control_chr_toks = {ctrl.symbol: ctrl for ctrl in ControlTypes}


def is_letter(char: Optional[str]) -> bool:
    return char is not None and (("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_")


def is_digit(char: Optional[str]) -> bool:
    return char is not None and "0" <= char <= "9"


class Lexer:
    """
    Scans a single source line into lexemes, one at a time.

    Nothing is scanned ahead: every call to get_next_lexeme() reads just
    enough characters for one lexeme.
    """

    def __init__(self, input: str = "", line: int = 1):
        self._buffer = input
        self._pos = 0
        self._line = line

    @property
    def buffer(self):
        return self._buffer

    @property
    def pos(self):
        return self._pos

    @property
    def line(self):
        return self._line

    @property
    def current_char(self) -> Optional[str]:
        if self._pos >= len(self._buffer):
            return None
        return self._buffer[self._pos]

    def _advance(self, offset=1) -> None:
        if offset < 0:
            raise IndexError(f"{self._advance.__name__} can only advance forward")
        if self._pos + offset > len(self._buffer):
            raise IndexError("Index out of range")
        self._pos += offset

    def _literal(self) -> Lexeme:
        value = 0
        curr_char = self.current_char
        while is_digit(curr_char):
            value = value * 10 + (ord(curr_char) - ord("0"))
            self._advance()
            curr_char = self.current_char
        return Lexeme(LexemeTypes.LITERAL, value, self._line)

    def _identifier(self) -> Lexeme:
        start = self._pos
        while is_letter(self.current_char):
            self._advance()
        return Lexeme(LexemeTypes.IDENTIFIER, self._buffer[start : self._pos], self._line)

    def get_next_lexeme(self) -> Optional[Lexeme]:
        curr_char = self.current_char
        if curr_char is None:
            return None

        if is_letter(curr_char):
            return self._identifier()

        elif is_digit(curr_char):
            return self._literal()

        elif curr_char in operation_chr_toks:
            self._advance()
            return Lexeme(LexemeTypes.OPERATION, operation_chr_toks[curr_char], self._line)

        elif curr_char in control_chr_toks:
            self._advance()
            return Lexeme(LexemeTypes.CONTROL, control_chr_toks[curr_char], self._line)

        raise LexicalError(curr_char, self._line)

    def __iter__(self) -> Iterator[Lexeme]:
        lexeme = self.get_next_lexeme()
        while lexeme is not None:
            yield lexeme
            lexeme = self.get_next_lexeme()

    def get_lexemes(self) -> List[Lexeme]:
        return list(self)
