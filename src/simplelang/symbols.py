"""
Symbol Table
============

Maps SimpleLang variable names to memory addresses.

There is no separate declaration step: ``int x;`` and a plain use of ``x``
both call ``resolve()``. The first reference allocates the next free
address; later references return the same one. Addresses below the base
(0-15 by default) are reserved for the machine.
"""

from typing import Iterator, Optional
import logging

from simplelang.errors import SourceLocation, TooManyVariablesError

logger = logging.getLogger(__name__)

DEFAULT_BASE_ADDRESS = 16
DEFAULT_MAX_VARIABLES = 100


class SymbolTable:
    """
    Name to address mapping with first-use allocation.

    Attributes:
        base_address: Address given to the first allocated name
        max_variables: Number of distinct names allowed
        next_address: Address the next new name will receive
    """

    def __init__(
        self,
        base_address: int = DEFAULT_BASE_ADDRESS,
        max_variables: int = DEFAULT_MAX_VARIABLES,
    ):
        self.base_address = base_address
        self.max_variables = max_variables
        self.next_address = base_address
        self._addresses: dict[str, int] = {}

    def resolve(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> int:
        """
        Return the address bound to ``name``, allocating one on first use.

        Args:
            name: Variable name
            location: Where the name was referenced (for error reporting)
            source_line: Source text of that line (for error reporting)

        Raises:
            TooManyVariablesError: If ``name`` is new and the table is full
        """
        address = self._addresses.get(name)
        if address is not None:
            return address

        if len(self._addresses) >= self.max_variables:
            raise TooManyVariablesError(name, self.max_variables, location, source_line)

        address = self.next_address
        self._addresses[name] = address
        self.next_address += 1
        logger.debug(f"Allocated '{name}' at address {address}")
        return address

    def lookup(self, name: str) -> Optional[int]:
        """Return the address of ``name`` without allocating, or None."""
        return self._addresses.get(name)

    def as_dict(self) -> dict[str, int]:
        """Copy of the mapping, in allocation order."""
        return dict(self._addresses)

    def __contains__(self, name: str) -> bool:
        return name in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self._addresses.items())
