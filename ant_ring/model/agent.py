"""Agent implementation for ants travelling on the unit loop."""

from enum import Enum
from typing import Optional
import numpy as np


class Orientation(Enum):
    """Direction of travel around the loop."""
    FORWARD = "forward"   # position-increasing
    REVERSE = "reverse"   # position-decreasing

    def flip(self) -> "Orientation":
        """Return the opposite direction."""
        if self is Orientation.FORWARD:
            return Orientation.REVERSE
        return Orientation.FORWARD

    @property
    def sign(self) -> float:
        return 1.0 if self is Orientation.FORWARD else -1.0


def wrap(position: float) -> float:
    """Reduce a position onto [0, 1)."""
    position = position % 1.0
    # Tiny negative inputs round up to exactly 1.0 after the modulo
    if position >= 1.0:
        return 0.0
    return position


def arc_length(start: float, end: float, orientation: Orientation) -> float:
    """
    Travel distance from ``start`` to ``end`` moving in ``orientation``.

    Wraps around the loop boundary when the end lies behind the start.
    Zero separation counts as a full lap (1.0), so the result is always in
    (0, 1].
    """
    natdist = abs(end - start)
    if natdist == 0:
        return 1.0
    order = start < end
    natural = orientation is Orientation.FORWARD
    return natdist if order == natural else 1.0 - natdist


class Agent:
    """
    Point ant on the unit loop.

    Agents are treated as immutable values: a state transition builds new
    agents instead of moving existing ones.
    """

    __slots__ = ("position", "orientation", "tag")

    def __init__(self, position: float, orientation: Orientation, tag: int):
        if not isinstance(orientation, Orientation):
            raise ValueError(f"Invalid orientation: {orientation!r}")
        self.position = wrap(float(position))
        self.orientation = orientation
        self.tag = int(tag)

    def distance(self, other: "Agent") -> float:
        """
        Distance travelled by this ant until it meets ``other``.

        Returns NaN when both ants share an orientation: they move in
        lock-step and never meet. Coincident ants report a full lap (1.0).
        """
        if self.orientation is other.orientation:
            return np.nan
        return arc_length(self.position, other.position, self.orientation)

    def advanced(self, distance: float) -> "Agent":
        """New agent moved ``distance`` along its own orientation."""
        return Agent(self.position + self.orientation.sign * distance,
                     self.orientation, self.tag)

    def flipped(self, position: Optional[float] = None) -> "Agent":
        """New agent travelling the other way, optionally moved to ``position``."""
        if position is None:
            position = self.position
        return Agent(position, self.orientation.flip(), self.tag)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Agent):
            return NotImplemented
        return (self.position == other.position
                and self.orientation is other.orientation
                and self.tag == other.tag)

    def __hash__(self) -> int:
        return hash((self.position, self.orientation, self.tag))

    def __repr__(self) -> str:
        return (f"Agent(tag={self.tag}, pos={self.position:.4f}, "
                f"orientation={self.orientation.value})")


def interpolate_position(current: Agent, target: Agent, phase: float) -> float:
    """
    Position of an ant part-way from ``current`` to ``target``.

    The ant keeps the orientation it had in ``current`` for the whole
    interpolation. Identical positions mean a full lap, which is how a
    free-running ring animates.
    """
    distance = arc_length(current.position, target.position,
                          current.orientation)
    return wrap(current.position + current.orientation.sign * distance * phase)
