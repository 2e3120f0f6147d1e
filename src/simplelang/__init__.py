"""
SimpleLang Compiler
===================

This package compiles SimpleLang, a minimal imperative language, into
textual assembly for a simple accumulator-based 8-bit machine.

SimpleLang supports:
- Integer declarations: ``int x;``
- Assignment with at most one operator: ``x = y + 1;``
- Single-level ``if`` with equality: ``if (x == 5) { ... }``
- Empty statements: ``;``

Pipeline
--------
Lexing, parsing and code generation run together in one pass; there is
no syntax tree:

    Source → Lexer ⇄ Parser → Emitter → Assembly

Main Components
---------------
- **lexer**: tokens with one token of pushback
- **symbols**: variable name to address allocation (from address 16)
- **emitter**: append-only, capacity-bounded assembly output and labels
- **parser**: recursive descent procedures that emit code as they parse
- **compiler**: options, results and the compile driver
- **cli**: the ``slc`` command

Quick Start
-----------
>>> from simplelang import compile_sl
>>> asm = compile_sl("int x; x = 5; if (x == 5) { x = x + 1; }")

Or from the command line:
    $ slc prog.sl -o prog.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from simplelang.compiler import (
    SimpleLangCompiler,
    CompilerOptions,
    CompilerResult,
    compile_sl,
    compile_file,
)
from simplelang.errors import (
    SourceLocation,
    SimpleLangError,
    SimpleLangSyntaxError,
    UnexpectedTokenError,
    UnterminatedBlockError,
    CapacityError,
    TooManyVariablesError,
    TooManyLinesError,
)
from simplelang.lexer import Lexer, Token, TokenType
from simplelang.source import CharSource
from simplelang.symbols import SymbolTable
from simplelang.emitter import AssemblyEmitter
from simplelang.parser import Parser

__all__ = [
    # Version
    "__version__",
    # Main API
    "SimpleLangCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_sl",
    "compile_file",
    # Errors
    "SourceLocation",
    "SimpleLangError",
    "SimpleLangSyntaxError",
    "UnexpectedTokenError",
    "UnterminatedBlockError",
    "CapacityError",
    "TooManyVariablesError",
    "TooManyLinesError",
    # Components
    "CharSource",
    "Lexer",
    "Token",
    "TokenType",
    "SymbolTable",
    "AssemblyEmitter",
    "Parser",
]
