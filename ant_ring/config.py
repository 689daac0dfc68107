"""Configuration dataclasses and YAML loader for the ant ring simulation."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path
import yaml

from .model.agent import Orientation


@dataclass
class LayoutSpec:
    position: float
    orientation: Orientation


@dataclass
class EngineConfig:
    population: int = 5
    speed: float = 0.2                # loop units per second
    auto_cycle: bool = True           # restart after wait + runtime + wait
    wait: float = 0.8                 # idle time before and after a run
    runtime: float = 1.0              # length of one run
    sort_initial_agents: bool = True  # ring order follows position order
    layout: List[LayoutSpec] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError on settings the engine cannot run with."""
        if self.population < 2:
            raise ValueError(
                f"population must be at least 2, got {self.population}")
        if self.speed < 0:
            raise ValueError(f"speed must be non-negative, got {self.speed}")
        if self.wait < 0:
            raise ValueError(f"wait must be non-negative, got {self.wait}")
        if self.runtime < 0:
            raise ValueError(
                f"runtime must be non-negative, got {self.runtime}")
        if self.layout and len(self.layout) != self.population:
            raise ValueError(
                f"layout has {len(self.layout)} ants but population "
                f"is {self.population}")


@dataclass
class SimulationConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    frames: int = 500
    dt: float = 0.02  # seconds per frame

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    def validate(self) -> None:
        self.engine.validate()
        if self.frames < 0:
            raise ValueError(f"frames must be non-negative, got {self.frames}")
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")


def _parse_orientation(value: Any) -> Orientation:
    """Accept 'forward'/'reverse' names or the legacy 0/1 encoding."""
    if isinstance(value, Orientation):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unknown orientation: {value!r}")
    if isinstance(value, int):
        if value == 0:
            return Orientation.FORWARD
        if value == 1:
            return Orientation.REVERSE
        raise ValueError(f"Unknown orientation: {value!r}")
    try:
        return Orientation(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown orientation: {value!r}") from None


def _parse_layout(layout_raw: List[Dict]) -> List[LayoutSpec]:
    """Parse a fixed initial ring from raw YAML data."""
    return [
        LayoutSpec(
            position=float(a['position']),
            orientation=_parse_orientation(a.get('orientation', 'forward'))
        )
        for a in layout_raw
    ]


def parse_config(raw: Optional[Dict[str, Any]]) -> SimulationConfig:
    """Build a validated SimulationConfig from a raw mapping."""
    raw = raw or {}
    defaults = EngineConfig()

    engine_raw = raw.get('engine', {})
    layout = _parse_layout(engine_raw.get('layout', []))
    engine = EngineConfig(
        population=int(engine_raw.get('population',
                                      len(layout) or defaults.population)),
        speed=float(engine_raw.get('speed', defaults.speed)),
        auto_cycle=bool(engine_raw.get('auto_cycle', defaults.auto_cycle)),
        wait=float(engine_raw.get('wait', defaults.wait)),
        runtime=float(engine_raw.get('runtime', defaults.runtime)),
        sort_initial_agents=bool(engine_raw.get(
            'sort_initial_agents', defaults.sort_initial_agents)),
        layout=layout
    )

    sim_raw = raw.get('simulation', {})

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    config = SimulationConfig(
        engine=engine,
        frames=int(sim_raw.get('frames', 500)),
        dt=float(sim_raw.get('dt', 0.02)),
        seed=sim_raw.get('seed'),
        csv_enabled=export_raw.get('csv', True)
    )
    config.validate()
    return config


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw)
