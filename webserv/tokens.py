"""Configuration tokens and the shapes of parsed configuration data."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List

DirectiveValue = List[str]
DirectiveMap = Dict[str, DirectiveValue]


class TokenType(enum.IntEnum):
    """Kind of a configuration token."""

    SERVER = 0
    LOCATION = 1
    DIRECTIVE = 2
    LBRACE = 3
    STRING = 4
    RBRACE = 5
    SEMICOLON = 6
    QUOTE = 7
    ERROR = 8
    SINGLE_QUOTE = 9
    NUMBER = 10
    END = 11
    INVALID = 12


class BlockType(enum.Enum):
    """Kind of configuration block."""

    SERVER = 0
    LOCATION = 1


@dataclass
class Token:
    """One token of a configuration file."""

    type: TokenType
    value: str = ""

    def __post_init__(self) -> None:
        self.type = TokenType(self.type)