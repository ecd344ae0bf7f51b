"""
protgen - Generate dynamic-loading boilerplate from C function prototypes.

This package provides tools to:
- Tokenize C-like function prototype declarations
- Parse them into function prototype records
- Render #define/typedef signatures, pointer declarations and load statements
- Load and save presets bundling generator options with example sources
"""

from protgen.core.tokenizer import Token, TokenKind, tokenize
from protgen.core.parser import FunctionPrototype, PrototypeParser, parse_prototypes
from protgen.core.generator import GeneratorConfig, generate, render
from protgen.core.preset import Preset
from protgen.errors import ProtGenError

__version__ = "0.1.0"

__all__ = [
    "__version__",
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
    "ProtGenError",
]
