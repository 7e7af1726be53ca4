"""Splits a configuration file into tokens and checks its structure."""

from __future__ import annotations

import enum
import os
import re
from typing import List, Optional, Union

from .tokens import Token, TokenType

_TOKEN_RE = re.compile(r"#|[{};]|[^\t\n\v\f {};]+")

_MAX_DEPTH = 2

_SERVER_DIRECTIVES = frozenset(
    {
        "listen",
        "host",
        "port",
        "server_name",
        "error_page",
        "client_max_body_size",
        "return",
        "root",
        "index",
        "autoindex",
    }
)
_LOCATION_DIRECTIVES = frozenset(
    {
        "error_page",
        "client_max_body_size",
        "method",
        "return",
        "root",
        "index",
        "autoindex",
        "cgi_pass",
        "cgi_params",
    }
)
_ONE_VALUE = frozenset(
    {"listen", "host", "port", "client_max_body_size", "root", "autoindex", "cgi_pass"}
)
_TWO_VALUES = frozenset({"cgi_params"})
_METHODS = frozenset({"GET", "POST", "DELETE"})


class _Problem(enum.Enum):
    INPUT = "Error: could not open input file"
    BAD_SEMICOLONS = "Syntax Error: Misuse of Semicolons!"
    BRACKETS = "Syntax Error: Misuse of Brackets!"
    ORDER = "Syntax Error: Wrong Token Order!"
    BAD_DIRECTIVE = "Syntax Error: String is not a valid Directive!"
    DIRECTIVE_INCOMPLETE = "Syntax Error: The Directive is Incomplete!"
    NO_LISTEN = (
        "Syntax Error: There is no Listen directive in one of the Server Block(s)!"
    )
    NOT_SERVER = "Syntax Error: A Server Block must start with server Header!"
    NOT_STRING = "Syntax Error: A Directive can only contain Strings!"
    ONLY_ONE = "Syntax Error: This Directive can only hold ONE STRING!"
    ONLY_TWO = "Syntax Error: This Directive can only hold TWO STRINGS!"
    NO_STRING = "Syntax Error: This Directive must as least hold ONE STRING!"
    LOCATION_STRUCT = "Syntax Error: A Location can only be followed by One String!!"
    INVALID_METHOD = "Syntax Error: The allowed methods are GET, POST, and DELETE!"
    DBL_METHOD = "Syntax Error: There is a doublure in the type of methods!"


class TokenizerError(ValueError):
    """Raised when a configuration cannot be read or is malformed."""


def _fail(problem: _Problem) -> TokenizerError:
    return TokenizerError(problem.value)


def _token_type(text: str) -> TokenType:
    if text == "{":
        return TokenType.LBRACE
    if text == "}":
        return TokenType.RBRACE
    if text == ";":
        return TokenType.SEMICOLON
    if text == "location":
        return TokenType.LOCATION
    if text == "server":
        return TokenType.SERVER
    return TokenType.STRING


class Tokenizer:
    """Token list of a configuration, validated when loaded from a file or text.

    Validation marks directive names as DIRECTIVE tokens, moves each location
    path into its LOCATION token and marks the path token INVALID.
    """

    def __init__(self, path: Optional[Union[str, os.PathLike]] = None) -> None:
        self._tokens: List[Token] = []
        if path is not None:
            try:
                with open(path, encoding="utf-8", newline="") as handle:
                    text = handle.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise _fail(_Problem.INPUT) from exc
            self._load(text)

    @classmethod
    def from_text(cls, text: str) -> "Tokenizer":
        """Tokenize and validate configuration ``text``."""
        tokenizer = cls()
        tokenizer._load(text)
        return tokenizer

    @property
    def tokens(self) -> List[Token]:
        return self._tokens

    def _load(self, text: str) -> None:
        for line in text.split("\n"):
            self.tokenize(line + "\n")
        self.check_basic_syntax()
        self.check_server_blocks()

    def tokenize(self, line: str) -> None:
        """Append the tokens of one line; a '#' starting a token ends the line."""
        line = line.split("\0", 1)[0]
        for match in _TOKEN_RE.finditer(line):
            text = match.group()
            if text == "#":
                break
            self._tokens.append(Token(_token_type(text), text))

    def check_basic_syntax(self) -> None:
        """Check brace balance and nesting and where semicolons may stand."""
        depth = 0
        previous: Optional[TokenType] = None
        for token in self._tokens:
            current = token.type
            if current == TokenType.LBRACE:
                depth += 1
                if depth > _MAX_DEPTH:
                    raise _fail(_Problem.BRACKETS)
            elif current == TokenType.RBRACE:
                depth -= 1
                if depth < 0:
                    raise _fail(_Problem.BRACKETS)
            if previous is not None:
                if previous == TokenType.SEMICOLON and current in (
                    TokenType.SEMICOLON,
                    TokenType.LBRACE,
                ):
                    raise _fail(_Problem.BAD_SEMICOLONS)
                if (
                    previous in (TokenType.RBRACE, TokenType.LBRACE)
                    and current == TokenType.SEMICOLON
                ):
                    raise _fail(_Problem.BAD_SEMICOLONS)
            previous = current
        if depth != 0:
            raise _fail(_Problem.BRACKETS)

    def check_server_blocks(self) -> None:
        """Check every server block, its directives and its locations."""
        position: Optional[int] = 0
        while position is not None:
            position = self._check_server_block(position)

    def _check_server_block(self, position: int) -> Optional[int]:
        tokens = self._tokens
        end = len(tokens)
        if position >= end:
            return None
        if tokens[position].type != TokenType.SERVER:
            raise _fail(_Problem.NOT_SERVER)
        position += 1
        if position >= end or tokens[position].type != TokenType.LBRACE:
            raise _fail(_Problem.ORDER)
        position += 1

        in_location = False
        location_started = False
        has_listen = False
        while position < end:
            current = tokens[position]
            previous = tokens[position - 1]
            current_type = current.type
            previous_type = previous.type

            if previous_type == TokenType.DIRECTIVE:
                position = self._check_values(position, previous.value)

            if current_type == TokenType.STRING and previous_type in (
                TokenType.SEMICOLON,
                TokenType.LBRACE,
                TokenType.RBRACE,
            ):
                allowed = _LOCATION_DIRECTIVES if in_location else _SERVER_DIRECTIVES
                if current.value not in allowed:
                    raise _fail(_Problem.BAD_DIRECTIVE)
                current.type = TokenType.DIRECTIVE
                if current.value == "listen":
                    has_listen = True

            if previous_type == TokenType.LOCATION:
                self._check_location(position)
                previous.value = current.value
                current.type = TokenType.INVALID
                in_location = True

            if in_location and current_type == TokenType.LBRACE:
                location_started = True
            if location_started and current_type == TokenType.RBRACE:
                in_location = False
            elif not in_location and current_type == TokenType.RBRACE:
                if not has_listen:
                    raise _fail(_Problem.NO_LISTEN)
                return position + 1
            position += 1
        return None

    def _check_values(self, position: int, name: str) -> int:
        """Check the values of directive ``name``; return the semicolon's index."""
        tokens = self._tokens
        values: List[str] = []
        while True:
            if position >= len(tokens):
                raise _fail(_Problem.DIRECTIVE_INCOMPLETE)
            token = tokens[position]
            if token.type == TokenType.SEMICOLON:
                break
            if name == "method":
                if token.value not in _METHODS:
                    raise _fail(_Problem.INVALID_METHOD)
            elif token.type != TokenType.STRING:
                raise _fail(_Problem.NOT_STRING)
            values.append(token.value)
            position += 1

        if name in _ONE_VALUE:
            if len(values) != 1:
                raise _fail(_Problem.ONLY_ONE)
        elif name in _TWO_VALUES:
            if len(values) != 2:
                raise _fail(_Problem.ONLY_TWO)
        elif name == "method":
            if not values:
                raise _fail(_Problem.NO_STRING)
            if len(set(values)) != len(values):
                raise _fail(_Problem.DBL_METHOD)
        elif not values:
            raise _fail(_Problem.NO_STRING)
        return position

    def _check_location(self, position: int) -> None:
        """A location header must hold exactly one string before its brace."""
        tokens = self._tokens
        strings = 0
        while True:
            if position >= len(tokens):
                raise _fail(_Problem.LOCATION_STRUCT)
            token = tokens[position]
            if token.type == TokenType.LBRACE:
                break
            if token.type != TokenType.STRING:
                raise _fail(_Problem.LOCATION_STRUCT)
            strings += 1
            position += 1
        if strings != 1:
            raise _fail(_Problem.LOCATION_STRUCT)