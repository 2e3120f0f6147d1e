"""
Assembly Emitter
================

Append-only, capacity-bounded sequence of assembly lines, plus the label
counter used for control flow.

Instruction Set
---------------
| Mnemonic | Operand | Effect                                  |
|----------|---------|-----------------------------------------|
| LDI      | n       | A = n                                   |
| LDA      | addr    | A = mem[addr]                           |
| STA      | addr    | mem[addr] = A                           |
| ADD      | addr    | A = A + mem[addr]                       |
| ADDI     | n       | A = A + n                               |
| SUB      | addr    | A = A - mem[addr]                       |
| SUBI     | n       | A = A - n                               |
| JZ       | label   | jump if A == 0                          |
| JMP      | label   | jump unconditionally                    |

Each instruction is one line, ``MNEMONIC operand``. Labels are bare lines
``Lk:`` where k counts up from 0, handed out in pairs.

Example output for ``if (x == 5) { }``:
    LDA 16
    SUBI 5
    JZ L0
    JMP L1
    L0:
    L1:
"""

from typing import Union
import logging

from simplelang.errors import TooManyLinesError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 1000

# Mnemonics of the target accumulator machine
LDI = "LDI"
LDA = "LDA"
STA = "STA"
ADD = "ADD"
ADDI = "ADDI"
SUB = "SUB"
SUBI = "SUBI"
JZ = "JZ"
JMP = "JMP"

MNEMONICS = frozenset({LDI, LDA, STA, ADD, ADDI, SUB, SUBI, JZ, JMP})


class AssemblyEmitter:
    """
    Collects emitted assembly lines in order.

    Lines are only ever appended; nothing is removed or rewritten.

    Attributes:
        max_lines: Maximum number of lines that may be emitted
        label_count: Number of labels handed out so far
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES):
        self.max_lines = max_lines
        self.label_count = 0
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """A copy of the emitted lines."""
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def emit(self, line: str) -> None:
        """
        Append one line of output.

        Raises:
            TooManyLinesError: If the output already holds max_lines lines
        """
        if len(self._lines) >= self.max_lines:
            raise TooManyLinesError(self.max_lines)
        self._lines.append(line)

    # Sink interface name
    append = emit

    def emit_instruction(self, mnemonic: str, operand: Union[int, str]) -> None:
        """Emit ``MNEMONIC operand``."""
        self.emit(f"{mnemonic} {operand}")

    def emit_label(self, label: str) -> None:
        """Emit a label definition line."""
        self.emit(f"{label}:")

    def new_label_pair(self) -> tuple[str, str]:
        """
        Allocate two consecutive labels.

        Returns:
            (first, second), e.g. ("L0", "L1") on the first call
        """
        first = f"L{self.label_count}"
        second = f"L{self.label_count + 1}"
        self.label_count += 2
        logger.debug(f"Allocated labels {first}, {second}")
        return first, second
