# subnav_core/models/settings.py
"""Navigation settings dataclass.

Typed view over the tolerance values the engine uses. The values encode UX
tuning rather than correctness, so all of them come from configuration.

Settings are organized by category:
- Navigation: dedup epsilon, merge gap, boundary buffer, main track names
- Playback: restart threshold, loop tail, fallback loop length
- Timeline: visible window width
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_MAIN_TRACK_NAMES: tuple[str, ...] = (
    "Hanzi",
    "Chinese",
    "Mandarin",
    "Simplified",
    "Traditional",
    "ZH",
    "CN",
    "Default",
)


class SettingsError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass(frozen=True)
class NavigationSettings:
    """All engine tolerances, in seconds."""

    # =========================================================================
    # Navigation Settings
    # =========================================================================
    dedup_epsilon_s: float = 0.001
    merge_gap_s: float = 0.18
    nav_buffer_s: float = 0.05
    main_track_names: tuple[str, ...] = field(default=DEFAULT_MAIN_TRACK_NAMES)

    # =========================================================================
    # Playback Settings
    # =========================================================================
    restart_threshold_s: float = 0.2
    loop_tail_s: float = 0.15
    loop_fallback_s: float = 5.0
    offset_step_s: float = 0.1

    # =========================================================================
    # Timeline Settings
    # =========================================================================
    timeline_window_s: float = 30.0

    def __post_init__(self):
        for name in (
            "dedup_epsilon_s",
            "merge_gap_s",
            "nav_buffer_s",
            "restart_threshold_s",
            "loop_tail_s",
            "loop_fallback_s",
        ):
            if getattr(self, name) < 0:
                raise SettingsError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.timeline_window_s <= 0:
            raise SettingsError(
                f"timeline_window_s must be > 0, got {self.timeline_window_s}"
            )

    @classmethod
    def from_config(cls, cfg: dict) -> NavigationSettings:
        """Create NavigationSettings from a config dictionary."""
        names = cfg.get("main_track_names") or DEFAULT_MAIN_TRACK_NAMES
        if isinstance(names, str):
            names = [n.strip() for n in names.split(",") if n.strip()]

        return cls(
            dedup_epsilon_s=float(cfg.get("dedup_epsilon_s", 0.001)),
            merge_gap_s=float(cfg.get("merge_gap_s", 0.18)),
            nav_buffer_s=float(cfg.get("nav_buffer_s", 0.05)),
            main_track_names=tuple(names),
            restart_threshold_s=float(cfg.get("restart_threshold_s", 0.2)),
            loop_tail_s=float(cfg.get("loop_tail_s", 0.15)),
            loop_fallback_s=float(cfg.get("loop_fallback_s", 5.0)),
            offset_step_s=float(cfg.get("offset_step_s", 0.1)),
            timeline_window_s=float(cfg.get("timeline_window_s", 30.0)),
        )

    def to_dict(self) -> dict:
        return {
            "dedup_epsilon_s": self.dedup_epsilon_s,
            "merge_gap_s": self.merge_gap_s,
            "nav_buffer_s": self.nav_buffer_s,
            "main_track_names": list(self.main_track_names),
            "restart_threshold_s": self.restart_threshold_s,
            "loop_tail_s": self.loop_tail_s,
            "loop_fallback_s": self.loop_fallback_s,
            "offset_step_s": self.offset_step_s,
            "timeline_window_s": self.timeline_window_s,
        }
