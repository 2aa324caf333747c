"""Ambient background effects: floating particles and falling glyph columns."""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from pulse_fx.config import EffectsConfig

if TYPE_CHECKING:
    from pulse import ElementId, Stage, Surface

    from pulse_fx.detector import MotionProfile

GLYPHS = (
    "01アイウエオカキクケコサシスセソタチツテトナニヌネノ"
    "ハヒフヘホマミムメモヤユヨラリルレロワヲン"
)


@dataclass(frozen=True)
class Particle:
    horizontal_position: float  # percent of viewport width
    lifetime_seconds: float
    delay_seconds: float


@dataclass(frozen=True)
class GlyphColumn:
    horizontal_position: float
    fall_seconds: float
    delay_seconds: float
    glyphs: str


def _seconds(value: float) -> str:
    return f"{value:g}s"


class ParticleGenerator:
    """Spawns a batch of particles on a fixed cadence.

    Every particle is removed ``ttl_ms`` after creation whether or not its
    animation finished, so the live population never exceeds one batch
    per overlapping TTL window.
    """

    def __init__(
        self,
        stage: Stage,
        batch_size: int = 10,
        interval_ms: float = 15_000.0,
        ttl_ms: float = 8_000.0,
    ) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("particles")
        self.batch_size = batch_size
        self.interval_ms = interval_ms
        self.ttl_ms = ttl_ms
        self._layer: int | None = None
        self._particles: dict[int, Particle] = {}

    @property
    def layer(self) -> ElementId | None:
        return self._layer

    @property
    def particles(self) -> dict[ElementId, Particle]:
        return dict(self._particles)

    def live_count(self) -> int:
        return len(self._particles)

    def start(self) -> None:
        if self._layer is not None:
            return
        self._layer = self._surface.create("div", "particle-system")
        self._surface.on_remove(self._forget)
        self.spawn_batch()
        self._timers.set_interval(self.interval_ms, self.spawn_batch)

    def spawn_batch(self) -> list[ElementId]:
        if self._layer is None or not self._surface.exists(self._layer):
            return []
        rng = self._stage.random
        spawned = []
        for _ in range(self.batch_size):
            particle = Particle(
                horizontal_position=rng.random() * 100,
                lifetime_seconds=rng.random() * 4 + 3,
                delay_seconds=rng.random() * 3,
            )
            eid = self._surface.create(
                "div",
                "particle",
                parent=self._layer,
                style={
                    "left": f"{particle.horizontal_position:g}%",
                    "animation-duration": _seconds(particle.lifetime_seconds),
                    "animation-delay": _seconds(particle.delay_seconds),
                },
            )
            self._particles[eid] = particle
            self._timers.set_timeout(self.ttl_ms, partial(self._surface.remove, eid))
            spawned.append(eid)
        return spawned

    def _forget(self, surface: Surface, eid: ElementId, element) -> None:
        self._particles.pop(eid, None)

    def teardown(self) -> None:
        self._timers.cancel_all()
        if self._layer is not None:
            self._surface.remove(self._layer)
            self._layer = None
        self._surface.off_remove(self._forget)
        self._particles.clear()


class GlyphRain:
    """A fixed set of falling glyph columns, created once."""

    def __init__(self, stage: Stage, columns: int = 50, glyphs_per_column: int = 20) -> None:
        self._stage = stage
        self._surface = stage.surface
        self.columns = columns
        self.glyphs_per_column = glyphs_per_column
        self._layer: int | None = None
        self._columns: dict[int, GlyphColumn] = {}

    @property
    def layer(self) -> ElementId | None:
        return self._layer

    @property
    def column_records(self) -> dict[ElementId, GlyphColumn]:
        return dict(self._columns)

    def start(self) -> None:
        if self._layer is not None:
            return
        rng = self._stage.random
        self._layer = self._surface.create("div", "matrix-bg")
        for _ in range(self.columns):
            column = GlyphColumn(
                horizontal_position=rng.random() * 100,
                fall_seconds=rng.random() * 3 + 2,
                delay_seconds=rng.random() * 2,
                glyphs="".join(rng.choice(GLYPHS) for _ in range(self.glyphs_per_column)),
            )
            eid = self._surface.create(
                "div",
                "matrix-column",
                parent=self._layer,
                text="\n".join(column.glyphs),
                style={
                    "left": f"{column.horizontal_position:g}%",
                    "animation-duration": _seconds(column.fall_seconds),
                    "animation-delay": _seconds(column.delay_seconds),
                },
            )
            self._columns[eid] = column

    def teardown(self) -> None:
        if self._layer is not None:
            self._surface.remove(self._layer)
            self._layer = None
        self._columns.clear()


class AmbientEngine:
    """Starts particles and glyph columns the motion profile allows."""

    def __init__(
        self, stage: Stage, profile: MotionProfile, config: EffectsConfig | None = None
    ) -> None:
        if config is None:
            config = EffectsConfig()
        self.profile = profile
        self.particles: ParticleGenerator | None = None
        self.glyphs: GlyphRain | None = None
        if not (profile.reduced_motion or profile.is_low_performance):
            self.particles = ParticleGenerator(
                stage,
                batch_size=config.mobile_particles if profile.is_mobile else config.desktop_particles,
                interval_ms=config.particle_interval_ms,
                ttl_ms=config.particle_ttl_ms,
            )
        if not (profile.reduced_motion or profile.is_low_performance or profile.is_mobile):
            self.glyphs = GlyphRain(stage, columns=config.glyph_columns)

    def start(self) -> None:
        if self.glyphs is not None:
            self.glyphs.start()
        if self.particles is not None:
            self.particles.start()

    def teardown(self) -> None:
        if self.particles is not None:
            self.particles.teardown()
        if self.glyphs is not None:
            self.glyphs.teardown()
