"""
jsonshape Core Parsing Engine.

This module provides the lexer, parser, value tree and serializer.
"""

from .engine import parse, loads, load, dumps, dump, Parser
from .serializer import serialize
from .tokenizer import Lexer, Token, TokenType, Position
from .value import Value, ValueKind, Null, Bool, Number, String, Array, Object

__all__ = [
    'parse', 'loads', 'load', 'dumps', 'dump', 'Parser', 'serialize',
    'Lexer', 'Token', 'TokenType', 'Position',
    'Value', 'ValueKind', 'Null', 'Bool', 'Number', 'String', 'Array', 'Object',
]
