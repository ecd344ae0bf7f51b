"""
Core modules for protgen.
"""

from protgen.core.tokenizer import Token, TokenKind, tokenize
from protgen.core.parser import FunctionPrototype, PrototypeParser, parse_prototypes
from protgen.core.generator import GeneratorConfig, generate, render
from protgen.core.preset import Preset

__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "FunctionPrototype",
    "PrototypeParser",
    "parse_prototypes",
    "GeneratorConfig",
    "generate",
    "render",
    "Preset",
]
