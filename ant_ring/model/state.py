"""State snapshot dataclasses for the ant ring simulation."""

from dataclasses import dataclass, field
from typing import ClassVar, List, Dict, Tuple, Optional, Sequence

from .agent import Agent, Orientation


@dataclass(frozen=True)
class SimulationState:
    """Ring of agents; index i is adjacent to index (i + 1) mod N."""
    agents: Tuple[Agent, ...]

    def __post_init__(self):
        object.__setattr__(self, 'agents', tuple(self.agents))

    def __len__(self) -> int:
        return len(self.agents)

    def __getitem__(self, index: int) -> Agent:
        return self.agents[index]

    def __iter__(self):
        return iter(self.agents)

    @classmethod
    def from_lists(cls, positions: Sequence[float],
                   orientations: Sequence[Orientation],
                   tags: Optional[Sequence[int]] = None) -> "SimulationState":
        """Build a ring from parallel position/orientation lists."""
        if len(positions) != len(orientations):
            raise ValueError(
                f"Got {len(positions)} positions but "
                f"{len(orientations)} orientations")
        if tags is None:
            tags = range(len(positions))
        return cls(tuple(
            Agent(p, o, t) for p, o, t in zip(positions, orientations, tags)
        ))

    @property
    def positions(self) -> List[float]:
        return [a.position for a in self.agents]

    @property
    def orientations(self) -> List[Orientation]:
        return [a.orientation for a in self.agents]

    def is_terminal(self) -> bool:
        """True when no adjacent pair of ants can ever meet."""
        return len({a.orientation for a in self.agents}) < 2


@dataclass(frozen=True)
class Transition:
    """
    Outcome of one collision search.

    ``pair`` and ``min_distance`` are None on a terminal ring, in which case
    ``state`` is the unchanged input state and ``rate`` is 1.0.
    """
    state: SimulationState
    rate: float
    pair: Optional[Tuple[int, int]] = None
    min_distance: Optional[float] = None

    @property
    def is_collision(self) -> bool:
        return self.pair is not None


@dataclass(frozen=True)
class AgentView:
    """Immutable interpolated view of one ant for drawing."""
    position: float
    orientation: Orientation
    tag: int


@dataclass
class FrameSnapshot:
    """Everything a consumer needs about one animation frame."""
    CSV_FIELDS: ClassVar[Tuple[str, ...]] = (
        "frame", "time", "phase", "tag", "position", "orientation")

    frame: int
    global_time: float
    phase: float
    agents: List[AgentView]
    metrics: Dict[str, float] = field(default_factory=dict)

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        time = round(self.global_time, 6)
        phase = round(self.phase, 6)
        return [
            dict(zip(self.CSV_FIELDS, (
                self.frame, time, phase, a.tag,
                round(a.position, 6), a.orientation.value)))
            for a in self.agents
        ]
