"""Summary report generation for the ant ring simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import FrameSnapshot


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.frame_metrics: List[Dict] = []
        self.peak_phase_rate = 0.0
        self.free_running_frames = 0
        self.flips_by_tag: Dict[int, int] = {}
        self._prev_orientations: Dict[int, str] = {}

    def update(self, snapshot: "FrameSnapshot") -> None:
        """Accumulate metrics per frame."""
        self.frame_metrics.append(snapshot.metrics.copy())

        rate = snapshot.metrics.get('phase_rate', 0.0)
        if rate > self.peak_phase_rate:
            self.peak_phase_rate = rate

        if snapshot.metrics.get('free_running', 0.0):
            self.free_running_frames += 1

        # Orientation changes seen by the renderer, per ant
        if not snapshot.agents:
            self._prev_orientations = {}
            return
        current = {a.tag: a.orientation.value for a in snapshot.agents}
        for tag, orientation in current.items():
            previous = self._prev_orientations.get(tag)
            if previous is not None and previous != orientation:
                self.flips_by_tag[tag] = self.flips_by_tag.get(tag, 0) + 1
        self._prev_orientations = current

    def generate_summary(self, final_snapshot: "FrameSnapshot",
                         output_dir: Path,
                         csv_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_snapshot.metrics
        frames = len(self.frame_metrics)
        free_pct = (self.free_running_frames / frames * 100) if frames > 0 else 0

        lines = [
            "",
            "=" * 80,
            "                    ANT RING SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(built-in defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Frames:                {frames}",
            f"Global Time:           {final_snapshot.global_time:.3f}",
            f"Collisions Computed:   {int(metrics.get('collisions', 0))}",
            f"Transitions Completed: {int(metrics.get('transitions', 0))}",
            f"Restart Cycles:        {int(metrics.get('cycles', 0))}",
            f"Peak Phase Rate:       {self.peak_phase_rate:.3f}",
            f"Free-running Frames:   {self.free_running_frames} ({free_pct:.1f}%)",
            "",
            "ORIENTATION FLIPS BY TAG",
            "-" * 40,
        ]

        if self.flips_by_tag:
            for tag in sorted(self.flips_by_tag):
                lines.append(f"Ant {tag}: {self.flips_by_tag[tag]}")
        else:
            lines.append("(none)")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if csv_enabled:
            lines.append(f"CSV Trace:  {output_dir / 'ant_trace.csv'}")
        else:
            lines.append("CSV Trace:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
