"""Simulation engine for the ant ring."""

import numpy as np
from typing import List, Optional, TYPE_CHECKING

from .agent import Agent, Orientation, interpolate_position
from .state import SimulationState, Transition, AgentView, FrameSnapshot

if TYPE_CHECKING:
    from ..config import EngineConfig


def compute_transition(state: SimulationState) -> Transition:
    """
    Find the next collision on the ring and the state right after it.

    Only ring neighbours (i, i + 1 mod N) are checked. The closest
    approaching pair wins, ties going to the first pair in ring order.
    All ants travel at unit speed, so by the time that pair meets every ant
    has moved half the pair's separation. The colliding pair then reverses.

    On a terminal ring (no approaching neighbours) the input state is
    returned unchanged with a rate of 1.0.
    """
    agents = state.agents
    count = len(agents)

    min_pair = None
    min_distance = None
    for i in range(count):
        j = (i + 1) % count
        dist = agents[i].distance(agents[j])
        if np.isnan(dist):
            continue
        if min_pair is None or dist < min_distance:
            min_pair = (i, j)
            min_distance = dist

    if min_pair is None:
        return Transition(state=state, rate=1.0)

    new_agents = [a.advanced(min_distance / 2) for a in agents]

    i, j = min_pair
    # Both ants of the pair end up on the exact same point
    meeting = new_agents[i].position
    new_agents[i] = new_agents[i].flipped()
    new_agents[j] = new_agents[j].flipped(meeting)

    return Transition(
        state=SimulationState(tuple(new_agents)),
        rate=2.0 / min_distance,
        pair=min_pair,
        min_distance=min_distance
    )


def random_state(population: int, rng: np.random.Generator,
                 sort: bool = True) -> SimulationState:
    """
    Scatter ``population`` ants uniformly with random orientations.

    With ``sort`` the ring follows position order and tags are reassigned
    by sorted index.
    """
    if population < 2:
        raise ValueError(
            f"population must be at least 2, got {population}")

    agents = []
    for tag in range(population):
        position = rng.random()
        orientation = (Orientation.FORWARD if rng.integers(0, 2) == 0
                       else Orientation.REVERSE)
        agents.append(Agent(position, orientation, tag))

    if sort:
        agents.sort(key=lambda a: a.position)
        agents = [Agent(a.position, a.orientation, tag)
                  for tag, a in enumerate(agents)]

    return SimulationState(tuple(agents))


class SimulationEngine:
    """
    Owns one running simulation.

    Holds the last realised state, the state of the next collision, and the
    interpolation phase between them. Time is advanced by the caller through
    tick(); nothing here assumes a particular frame scheduler.

    With ``auto_cycle`` enabled the engine idles for ``wait`` before a run,
    animates for ``runtime``, idles for another ``wait`` and then resets
    itself with a fresh ring. All of these are measured in global time,
    which advances by ``speed * dt`` per tick.
    """

    def __init__(self, config: "EngineConfig",
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._population = config.population

        self._current: Optional[SimulationState] = None
        self._target: Optional[SimulationState] = None
        self._phase = 0.0
        self._phase_rate = 0.0
        self._global_time = 0.0

        # Metrics tracking
        self.frame = 0
        self.transitions_completed = 0
        self.collisions = 0
        self.cycles = 0
        self._last_transition: Optional[Transition] = None

        self.reset()

    @property
    def current_state(self) -> Optional[SimulationState]:
        return self._current

    @property
    def target_state(self) -> Optional[SimulationState]:
        return self._target

    @property
    def phase(self) -> float:
        return self._phase

    @property
    def phase_rate(self) -> float:
        return self._phase_rate

    @property
    def global_time(self) -> float:
        return self._global_time

    @property
    def last_transition(self) -> Optional[Transition]:
        return self._last_transition

    def reset(self, population: Optional[int] = None,
              rng: Optional[np.random.Generator] = None) -> None:
        """
        Start over with a new ring.

        A configured layout of matching size is used exactly as given, in
        its own ring order and regardless of ``sort_initial_agents``.
        Otherwise the ring is random. Like ``rng``, a ``population`` passed
        here sticks for later auto-cycle restarts.
        """
        if rng is not None:
            self.rng = rng
        if population is None:
            population = self._population

        if self.config.layout and population == len(self.config.layout):
            state = SimulationState.from_lists(
                [s.position for s in self.config.layout],
                [s.orientation for s in self.config.layout]
            )
        else:
            state = random_state(population, self.rng,
                                 self.config.sort_initial_agents)
        self._population = population
        self.restore(state)

    def restore(self, state: SimulationState) -> None:
        """Start over from an explicit ring."""
        if len(state) < 2:
            raise ValueError(
                f"population must be at least 2, got {len(state)}")
        self._current = state
        self._target = None
        self._phase = 0.0
        self._phase_rate = 0.0
        self._global_time = 0.0
        self._last_transition = None

    def _in_wait_window(self) -> bool:
        wait = self.config.wait
        runtime = self.config.runtime
        return (self._global_time <= wait or
                wait + runtime <= self._global_time < wait * 2 + runtime)

    def tick(self, dt: float) -> None:
        """
        Advance simulated time by ``dt`` seconds.

        1. Swap in the target state once the previous interpolation is done
        2. Compute the next target if there is none
        3. Idle or reset when auto-cycling says so
        4. Advance phase (clamped to 1.0) and global time

        Zero-length ticks do not count as frames.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if dt > 0:
            self.frame += 1
        speed = self.config.speed

        if self._phase >= 1.0:
            self._current = self._target
            self._target = None
            self._phase = 0.0
            self.transitions_completed += 1

        if self._target is None:
            transition = compute_transition(self._current)
            self._target = transition.state
            self._phase_rate = transition.rate
            self._last_transition = transition
            if transition.is_collision:
                self.collisions += 1

        if self.config.auto_cycle:
            if self._in_wait_window():
                self._global_time += speed * dt
                return
            if self._global_time >= self.config.runtime + self.config.wait * 2:
                self.reset()
                self.cycles += 1
                return

        self._phase = min(1.0, self._phase + self._phase_rate * speed * dt)
        self._global_time += speed * dt

    def query_positions(self, phase: Optional[float] = None) -> List[AgentView]:
        """
        Interpolated ants for drawing, in ring order.

        Empty until a target state has been computed.
        """
        if self._current is None or self._target is None:
            return []
        if phase is None:
            phase = self._phase
        return [
            AgentView(
                position=interpolate_position(current, target, phase),
                orientation=current.orientation,
                tag=current.tag
            )
            for current, target in zip(self._current, self._target)
        ]

    def is_free_running(self) -> bool:
        """True when the current ring has no collisions left."""
        return self._current is not None and self._current.is_terminal()

    def frame_snapshot(self) -> FrameSnapshot:
        """Create a snapshot of the current frame for exporters."""
        metrics = {
            'collisions': self.collisions,
            'transitions': self.transitions_completed,
            'cycles': self.cycles,
            'phase_rate': self._phase_rate,
            'free_running': float(self.is_free_running()),
        }
        return FrameSnapshot(
            frame=self.frame,
            global_time=self._global_time,
            phase=self._phase,
            agents=self.query_positions(),
            metrics=metrics
        )
