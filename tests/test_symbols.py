"""
Symbol Table and Emitter Tests
==============================

Tests for address allocation and the append-only assembly output.
"""

import logging

import pytest
from simplelang.emitter import AssemblyEmitter
from simplelang.errors import (
    CapacityError,
    SourceLocation,
    TooManyLinesError,
    TooManyVariablesError,
)
from simplelang.symbols import SymbolTable


# =============================================================================
# Symbol Table Tests
# =============================================================================

class TestSymbolTable:
    """Tests for first-use address allocation."""

    def test_first_address_is_16(self):
        table = SymbolTable()
        assert table.resolve("x") == 16

    def test_addresses_are_sequential(self):
        table = SymbolTable()
        assert [table.resolve(n) for n in ("a", "b", "c")] == [16, 17, 18]

    def test_resolve_is_stable(self):
        table = SymbolTable()
        first = table.resolve("x")
        table.resolve("y")
        assert table.resolve("x") == first
        assert len(table) == 2

    def test_custom_base_address(self):
        table = SymbolTable(base_address=100)
        assert table.resolve("x") == 100
        assert table.next_address == 101

    def test_lookup_does_not_allocate(self):
        table = SymbolTable()
        assert table.lookup("x") is None
        assert "x" not in table
        table.resolve("x")
        assert table.lookup("x") == 16
        assert "x" in table

    def test_allocation_order(self):
        table = SymbolTable()
        for name in ("z", "a", "m"):
            table.resolve(name)
        assert table.as_dict() == {"z": 16, "a": 17, "m": 18}
        assert list(table) == [("z", 16), ("a", 17), ("m", 18)]

    def test_capacity_exceeded(self):
        table = SymbolTable(max_variables=2)
        table.resolve("a")
        table.resolve("b")
        with pytest.raises(TooManyVariablesError) as exc_info:
            table.resolve("c")
        assert exc_info.value.limit == 2
        assert exc_info.value.name == "c"
        assert isinstance(exc_info.value, CapacityError)
        assert "c" not in table

    def test_known_names_resolve_when_full(self):
        table = SymbolTable(max_variables=1)
        table.resolve("a")
        assert table.resolve("a") == 16

    def test_capacity_error_location(self):
        table = SymbolTable(max_variables=1)
        table.resolve("a")
        location = SourceLocation("p.sl", 3, 1)
        with pytest.raises(TooManyVariablesError) as exc_info:
            table.resolve("b", location, "b = 1;")
        assert str(exc_info.value).startswith("p.sl:3:1: error: too many variables")

    def test_allocation_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="simplelang.symbols")
        SymbolTable().resolve("x")
        assert "Allocated 'x' at address 16" in caplog.text


# =============================================================================
# Emitter Tests
# =============================================================================

class TestAssemblyEmitter:
    """Tests for the append-only output sequence."""

    def test_lines_in_order(self):
        emitter = AssemblyEmitter()
        emitter.emit("LDI 1")
        emitter.emit("STA 16")
        assert emitter.lines == ["LDI 1", "STA 16"]

    def test_instruction_format(self):
        emitter = AssemblyEmitter()
        emitter.emit_instruction("LDI", "5")
        emitter.emit_instruction("STA", 16)
        assert emitter.lines == ["LDI 5", "STA 16"]

    def test_label_format(self):
        emitter = AssemblyEmitter()
        emitter.emit_label("L0")
        assert emitter.lines == ["L0:"]

    def test_append_alias(self):
        emitter = AssemblyEmitter()
        emitter.append("JMP L1")
        assert emitter.lines == ["JMP L1"]

    def test_lines_is_a_copy(self):
        emitter = AssemblyEmitter()
        emitter.emit("LDI 1")
        emitter.lines.append("junk")
        assert emitter.lines == ["LDI 1"]
        assert len(emitter) == 1

    def test_label_pairs_are_consecutive(self):
        emitter = AssemblyEmitter()
        assert emitter.new_label_pair() == ("L0", "L1")
        assert emitter.new_label_pair() == ("L2", "L3")
        assert emitter.label_count == 4

    def test_labels_do_not_emit(self):
        emitter = AssemblyEmitter()
        emitter.new_label_pair()
        assert emitter.lines == []

    def test_capacity_exceeded(self):
        emitter = AssemblyEmitter(max_lines=2)
        emitter.emit("LDI 1")
        emitter.emit("STA 16")
        with pytest.raises(TooManyLinesError) as exc_info:
            emitter.emit("LDI 2")
        assert exc_info.value.limit == 2
        assert emitter.lines == ["LDI 1", "STA 16"]
