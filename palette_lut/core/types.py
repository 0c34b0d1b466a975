"""Shared types for palette-lut: descriptors, channel sources, segments, Command, Report."""

from __future__ import annotations

import numbers
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

import numpy as np

from palette_lut.core.errors import NonIntegralValueError, OutOfRangeError, UnsupportedBitsPerEntryError

MAX_ENTRIES = 2**16  # a descriptor entry count of 0 stands for this

_DTYPES: dict[int, type] = {8: np.uint8, 16: np.uint16}


def dtype_for_bits(bits_per_entry: int) -> type:
    """Return the unsigned numpy dtype that stores one entry of the given width."""
    try:
        return _DTYPES[bits_per_entry]
    except KeyError:
        raise UnsupportedBitsPerEntryError(
            f'Bits per entry must be either 8 or 16, got {bits_per_entry!r}.'
        ) from None


def as_integer(value: Any) -> int:
    """Convert an integral number to int; 1.0 is accepted, 1.7 is not."""
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise NonIntegralValueError(f'Expected an integer, got {value!r}.')


def check_entry_count(number_of_entries: int) -> int:
    """Reject descriptor entry counts outside [0, 65536]."""
    if not 0 <= number_of_entries <= MAX_ENTRIES:
        raise OutOfRangeError(
            f'Number of entries must be between 0 and {MAX_ENTRIES}, got {number_of_entries}.'
        )
    return number_of_entries


def resolve_entry_count(number_of_entries: int) -> int:
    """Map the descriptor sentinel 0 to 65536."""
    check_entry_count(number_of_entries)
    return MAX_ENTRIES if number_of_entries == 0 else number_of_entries


@dataclass(frozen=True)
class ChannelDescriptor:
    """Palette Color Lookup Table Descriptor for one channel."""

    number_of_entries: int  # 0 means 65536
    first_value_mapped: int
    bits_per_entry: int

    def __post_init__(self) -> None:
        check_entry_count(self.number_of_entries)

    @classmethod
    def coerce(cls, value: ChannelDescriptor | Sequence[int]) -> ChannelDescriptor:
        """Accept a descriptor or a raw (entries, first value, bits) 3-tuple."""
        if isinstance(value, cls):
            return value
        if len(value) != 3:
            raise ValueError(f'Descriptor must have exactly three values, got {len(value)}.')
        n, first, bits = (as_integer(v) for v in value)
        return cls(number_of_entries=n, first_value_mapped=first, bits_per_entry=bits)

    @property
    def entry_count(self) -> int:
        return resolve_entry_count(self.number_of_entries)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.number_of_entries, self.first_value_mapped, self.bits_per_entry)


@dataclass(frozen=True)
class ExplicitData:
    """Channel entries given one value per slot."""

    values: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class SegmentedData:
    """Channel entries given as a segment program, expanded on demand."""

    program: tuple[int, ...]


ChannelSource = Union[ExplicitData, SegmentedData]


@dataclass(frozen=True)
class DiscreteSegment:
    """Opcode 0: `length` copies of `value`."""

    length: int
    value: int

    opcode = 0


@dataclass(frozen=True)
class LinearSegment:
    """Opcode 1: `length` values interpolated from the previous entry to `endpoint`."""

    length: int
    endpoint: int

    opcode = 1


@dataclass(frozen=True)
class IndirectSegment:
    """Opcode 2: replay `length` segments found at `offset`. Parsed but never expanded."""

    length: int
    offset: int

    opcode = 2


Segment = Union[DiscreteSegment, LinearSegment, IndirectSegment]


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='colormap', help='Print a generated colormap')

        @command.run
        def run(args, report):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._configure_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register a function that adds the command's own arguments."""
        self._configure_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._configure_fn is not None:
            self._configure_fn(parser)

    def execute(self, args: Any, report: Report) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args, report)


@dataclass
class Report:
    """Accumulates command results for text/JSON output."""

    title: str = ''
    uid: str | None = None
    first_value_mapped: int | None = None
    bits_per_entry: int | None = None
    rows: list[tuple[int, ...]] = field(default_factory=list)  # RGB triplets
    values: list[int] = field(default_factory=list)  # single-channel entries
    meta: dict[str, Any] = field(default_factory=dict)

    def set_rows(self, rows: Any) -> None:
        """Store table rows as plain int tuples (accepts numpy arrays)."""
        self.rows = [tuple(int(v) for v in row) for row in rows]

    def set_values(self, values: Any) -> None:
        self.values = [int(v) for v in values]

    def add(self, key: str, value: Any) -> None:
        self.meta[key] = value
