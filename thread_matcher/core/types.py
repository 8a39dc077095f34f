"""Shared types for thread-match: colour values, threads, distance methods, Command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from thread_matcher.core.report import MatchReport

# Stitches covered by one skein at 14-count with 2 strands
STITCHES_PER_SKEIN = 400.0


@dataclass(frozen=True)
class RGBColor:
    """8-bit sRGB colour. Components must be ints in [0, 255]."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise ValueError(f'RGB components must be int, got {channel!r}')
            if not 0 <= channel <= 255:
                raise ValueError(f'RGB component out of range 0-255: {channel}')

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class XYZColor:
    """CIE 1931 XYZ, luminance scaled to 0-100, D65 white."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LabColor:
    """CIELab colour: l in 0-100, a (green-red) and b (blue-yellow) roughly -128..127."""

    l: float  # noqa: E741
    a: float
    b: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.l, self.a, self.b)


@dataclass(frozen=True)
class ReferenceColor:
    """A thread in a palette: unique id, display name, RGB and precomputed Lab."""

    id: str
    name: str
    rgb: RGBColor
    lab: LabColor

    def skeins_needed(self, stitch_count: int, fabric_count: int = 14) -> float:
        """Estimated skeins for stitch_count stitches.

        Higher fabric counts use less thread per stitch, so one skein covers
        proportionally more stitches.
        """
        if fabric_count < 1:
            raise ValueError(f'fabric count must be at least 1, got {fabric_count}')
        stitches_per_skein = STITCHES_PER_SKEIN * (fabric_count / 14.0)
        return stitch_count / stitches_per_skein


class DistanceMethod(str, Enum):
    """Which colour-difference formula a matching call uses."""

    CIE76 = 'cielab'
    CIE94 = 'cie94'
    RGB = 'rgb'

    @property
    def display_name(self) -> str:
        return _METHOD_NAMES[self]

    @property
    def description(self) -> str:
        return _METHOD_DESCRIPTIONS[self]


_METHOD_NAMES = {
    DistanceMethod.CIE76: 'CIELab (Recommended)',
    DistanceMethod.CIE94: 'CIE94 (Most Accurate)',
    DistanceMethod.RGB: 'RGB (Fast)',
}

_METHOD_DESCRIPTIONS = {
    DistanceMethod.CIE76: 'Good balance of accuracy and speed. Best for most patterns.',
    DistanceMethod.CIE94: 'Most perceptually accurate. Best for portraits and skin tones.',
    DistanceMethod.RGB: 'Simple and fast, but less accurate color matching.',
}


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='match', help='Closest thread for each colour')

        @command.run
        def run(palette, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, palette: Any, report: MatchReport, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(palette, report, args)
