"""Random configuration token streams for exercising the config builder."""

from __future__ import annotations

import random
import string
from typing import List, Optional, Sequence

from .tokens import Token, TokenType

TEST_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
MAX_VAL = 1000
MAX_LEN = 20
MAX_STR_SEQ = 5
MAX_DIRECTIVES_PER_BLOCK = 10
LOCATION_PATH_MAX_LEN = 10

DIRECTIVE_NAMES = (
    "listen",
    "server_name",
    "index",
    "root",
    "error_page",
    "return",
    "method",
)

_TYPE_NAMES = {
    TokenType.STRING: "STRING",
    TokenType.DIRECTIVE: "DIRECTIVE",
    TokenType.SEMICOLON: "SEMICOLON",
    TokenType.SERVER: "SERVER",
    TokenType.LOCATION: "LOCATION",
    TokenType.LBRACE: "LBRACE",
    TokenType.RBRACE: "RBRACE",
}

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def token_type_name(token_type) -> str:
    """Return the name used for ``token_type`` in JSON output, or UNKNOWN."""
    return _TYPE_NAMES.get(token_type, "UNKNOWN")


def escape_json_string(text: str) -> str:
    """Escape ``text`` for use inside a JSON string literal."""
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) <= 0x1F:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    return "".join(parts)


class RandomTokenList:
    """Accumulates randomly generated, well-formed configuration tokens."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)
        self._tokens: List[Token] = []

    @property
    def tokens(self) -> Sequence[Token]:
        return tuple(self._tokens)

    def rand_str(self, length: int) -> str:
        """Return ``length`` random letters and digits."""
        return "".join(self._random.choice(TEST_CHARS) for _ in range(length))

    def generate_directive(self) -> None:
        """Append a directive name, one to five strings and a semicolon."""
        rng = self._random
        self._tokens.append(Token(TokenType.DIRECTIVE, rng.choice(DIRECTIVE_NAMES)))
        for _ in range(rng.randint(1, MAX_STR_SEQ)):
            self._tokens.append(
                Token(TokenType.STRING, self.rand_str(rng.randint(1, MAX_LEN)))
            )
        self._tokens.append(Token(TokenType.SEMICOLON, ";"))

    def _generate_directives(self) -> None:
        for _ in range(self._random.randint(0, MAX_DIRECTIVES_PER_BLOCK)):
            self.generate_directive()

    def generate_server_block(self) -> None:
        """Append a server block holding directives and one location block."""
        self._tokens.append(Token(TokenType.SERVER, ""))
        self._tokens.append(Token(TokenType.LBRACE, "{"))
        self._generate_directives()
        self._tokens.append(
            Token(TokenType.LOCATION, "/" + self.rand_str(LOCATION_PATH_MAX_LEN))
        )
        self._tokens.append(Token(TokenType.LBRACE, "{"))
        self._generate_directives()
        self._tokens.append(Token(TokenType.RBRACE, "}"))
        self._tokens.append(Token(TokenType.RBRACE, "}"))

    def to_json(self) -> str:
        """Render the tokens as a JSON array of ``type``/``value`` objects."""
        entries = [
            "\t{"
            f'\n\t\t"type":"{token_type_name(token.type)}",'
            f'\n\t\t"value":"{escape_json_string(token.value)}"'
            "\n\t}"
            for token in self._tokens
        ]
        return "[\n" + ",\n".join(entries) + "\n]\n"