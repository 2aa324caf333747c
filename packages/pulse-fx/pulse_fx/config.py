"""Effect tuning configuration."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EffectsConfig:
    """Immutable timing and probability settings for the effect engines.

    Attributes:
        reveal_threshold: Visible fraction that counts as "in view".
        reveal_bottom_margin: Viewport shrink from below, in pixels.
        reveal_stagger_ms: Delay between staggered descendant reveals.
        counter_steps: Fixed number of count-up ticks per counter.
        counter_interval_ms: Time between count-up ticks.
        progress_steps: Fixed number of fill ticks per progress bar.
        progress_interval_ms: Time between fill ticks.
        progress_delay_ms: Wait after visibility before filling starts.
        particle_interval_ms: Cadence of particle batches.
        particle_ttl_ms: Forced removal time for every particle.
        mobile_particles: Batch size on mobile viewports.
        desktop_particles: Batch size elsewhere.
        glyph_columns: Number of glyph columns created at start.
        cursor_throttle_ms: Minimum time between lead cursor updates.
        cursor_smoothing: Fraction of the remaining distance covered per frame.
        text_glitch_probability: Chance per check that a glitch-text element glitches.
        random_glitch_probability: Chance per check that a card distorts.
    """

    reveal_threshold: float = 0.1
    reveal_bottom_margin: float = -100.0
    reveal_stagger_ms: float = 100.0
    counter_steps: int = 100
    counter_interval_ms: float = 20.0
    progress_steps: int = 50
    progress_interval_ms: float = 30.0
    progress_delay_ms: float = 300.0
    particle_interval_ms: float = 15_000.0
    particle_ttl_ms: float = 8_000.0
    mobile_particles: int = 5
    desktop_particles: int = 10
    glyph_columns: int = 50
    cursor_throttle_ms: float = 16.0
    cursor_smoothing: float = 0.1
    text_glitch_probability: float = 0.1
    random_glitch_probability: float = 0.05
