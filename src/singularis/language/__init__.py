"""SINGULARIS PRIME language: AST, parser, interpreter and editor support."""

from singularis.language.highlighting import THEME, Token, completion_items, tokenize
from singularis.language.interpreter import SingularisInterpreter, run_source
from singularis.language.parser import SingularisParser, parse_program

__all__ = [
    "THEME",
    "SingularisInterpreter",
    "SingularisParser",
    "Token",
    "completion_items",
    "parse_program",
    "run_source",
    "tokenize",
]
