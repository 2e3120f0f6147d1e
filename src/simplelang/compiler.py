"""
SimpleLang Compiler Main Module
===============================

This module provides the main compiler interface. Every compilation gets a
fresh context (lexer with its pushback slot, symbol table, emitter with
its label counter), so one SimpleLangCompiler can be reused freely.

Usage
-----
Command line:
    $ slc prog.sl -o prog.asm

Programmatic:
    >>> from simplelang import compile_sl
    >>> print(compile_sl("x = 1; y = x + 2;"), end="")
    LDI 1
    STA 16
    LDA 16
    ADDI 2
    STA 17

Error Handling
--------------
Compilation stops at the first error. The SimpleLangError propagates to
the caller and no partial result is returned.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from simplelang.emitter import AssemblyEmitter, DEFAULT_MAX_LINES
from simplelang.lexer import Lexer, TokenObserver, DEFAULT_MAX_TOKEN_LENGTH
from simplelang.parser import Parser
from simplelang.source import CharSource
from simplelang.symbols import (
    SymbolTable,
    DEFAULT_BASE_ADDRESS,
    DEFAULT_MAX_VARIABLES,
)

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        base_address: Address of the first variable (lower ones are reserved)
        max_variables: Maximum number of distinct variable names
        max_lines: Maximum number of emitted assembly lines
        max_token_length: Characters kept for identifier/number text.
                          None disables truncation.
    """
    base_address: int = DEFAULT_BASE_ADDRESS
    max_variables: int = DEFAULT_MAX_VARIABLES
    max_lines: int = DEFAULT_MAX_LINES
    max_token_length: Optional[int] = DEFAULT_MAX_TOKEN_LENGTH

    def __post_init__(self):
        if self.base_address < 0:
            raise ValueError(f"base_address must be non-negative, got {self.base_address}")
        if self.max_variables < 1:
            raise ValueError(f"max_variables must be positive, got {self.max_variables}")
        if self.max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {self.max_lines}")
        if self.max_token_length is not None and self.max_token_length < 1:
            raise ValueError(
                f"max_token_length must be positive or None, got {self.max_token_length}"
            )


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        lines: Emitted assembly lines, in order
        symbols: Variable name -> address, in allocation order
        label_count: Number of labels allocated
        token_count: Number of tokens scanned
    """
    filename: str = ""
    lines: list[str] = field(default_factory=list)
    symbols: dict[str, int] = field(default_factory=dict)
    label_count: int = 0
    token_count: int = 0

    @property
    def assembly(self) -> str:
        """The assembly text, one line per instruction or label."""
        return "".join(f"{line}\n" for line in self.lines)

    def symbol_listing(self) -> str:
        """``name address`` per variable, in allocation order."""
        return "".join(f"{name} {address}\n" for name, address in self.symbols.items())


class SimpleLangCompiler:
    """
    SimpleLang to accumulator-machine assembly compiler.

    Example:
        compiler = SimpleLangCompiler()
        result = compiler.compile_source("int x; x = 5;")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(
        self,
        source: Union[str, CharSource],
        filename: str = "<input>",
        on_token: Optional[TokenObserver] = None,
    ) -> CompilerResult:
        """
        Compile SimpleLang source to assembly.

        Args:
            source: Source text, or a CharSource to pull characters from
            filename: Source filename for error messages
            on_token: Optional observer called with every scanned token

        Returns:
            CompilerResult with the emitted lines and symbol map

        Raises:
            SimpleLangError: If compilation fails
        """
        if isinstance(source, str):
            source_lines = source.splitlines()
            char_source = CharSource.from_string(source, filename)
        else:
            source_lines = []
            char_source = source
            filename = source.filename

        lexer = Lexer(
            char_source,
            max_token_length=self.options.max_token_length,
            on_token=on_token,
        )
        symbols = SymbolTable(self.options.base_address, self.options.max_variables)
        emitter = AssemblyEmitter(self.options.max_lines)

        Parser(lexer, symbols, emitter, source_lines).parse()

        result = CompilerResult(
            filename=filename,
            lines=emitter.lines,
            symbols=symbols.as_dict(),
            label_count=emitter.label_count,
            token_count=lexer.token_count,
        )
        logger.debug(
            f"Compiled {filename}: {len(result.lines)} lines, "
            f"{len(result.symbols)} variables, {result.label_count} labels"
        )
        return result

    def compile_file(
        self,
        filepath: Union[str, Path],
        on_token: Optional[TokenObserver] = None,
    ) -> CompilerResult:
        """
        Compile a SimpleLang source file.

        Raises:
            SimpleLangError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath), on_token=on_token)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_sl(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile SimpleLang source code to assembly text.

    Raises:
        SimpleLangError: If compilation fails
    """
    return SimpleLangCompiler(options).compile_source(source, filename).assembly


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a SimpleLang source file to assembly text.

    The output file is only written when compilation succeeds.

    Args:
        filepath: Path to the source file
        output_path: Optional path to write the assembly to
        options: Compiler configuration

    Returns:
        Generated assembly text

    Raises:
        SimpleLangError: If compilation fails
        FileNotFoundError: If source file not found

    Example:
        >>> asm = compile_file("input.sl", "output.asm")
    """
    result = SimpleLangCompiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8")

    return result.assembly
