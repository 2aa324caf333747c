"""Effects - detects the motion profile once and starts the engines it allows."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pulse_fx.ambient import AmbientEngine
from pulse_fx.config import EffectsConfig
from pulse_fx.counters import CounterAnimator, ProgressAnimator
from pulse_fx.cursor import CursorTrail
from pulse_fx.detector import CapabilityProbe, MotionProfile, detect
from pulse_fx.glitch import GlitchEngine
from pulse_fx.parallax import Parallax
from pulse_fx.reveal import RevealEngine
from pulse_fx.text import TextEffects

if TYPE_CHECKING:
    from pulse import Stage


class Effects:
    """All page effects for one stage.

    Reveal, counters, progress bars, glitches and text effects always
    run. Particles need full motion and performance; glyph columns,
    parallax and the cursor trail additionally need a desktop viewport,
    and the cursor a pointer device. ``teardown`` is registered with the
    stage so ``stage.teardown()`` stops everything.
    """

    def __init__(
        self,
        stage: Stage,
        profile: MotionProfile | None = None,
        probe: CapabilityProbe | None = None,
        config: EffectsConfig | None = None,
    ) -> None:
        if config is None:
            config = EffectsConfig()
        if profile is None:
            profile = detect(stage.surface.viewport, probe)
        self._stage = stage
        self.config = config
        self.profile = profile
        full_desktop = not (profile.is_low_performance or profile.is_mobile)

        self.reveal = RevealEngine(
            stage,
            threshold=config.reveal_threshold,
            bottom_margin=config.reveal_bottom_margin,
            stagger_ms=config.reveal_stagger_ms,
        )
        self.counters = CounterAnimator(
            stage, steps=config.counter_steps, interval_ms=config.counter_interval_ms
        )
        self.progress = ProgressAnimator(
            stage,
            steps=config.progress_steps,
            interval_ms=config.progress_interval_ms,
            delay_ms=config.progress_delay_ms,
        )
        self.ambient = AmbientEngine(stage, profile, config)
        self.parallax = Parallax(stage) if full_desktop else None
        self.cursor = (
            CursorTrail(
                stage,
                throttle_ms=config.cursor_throttle_ms,
                smoothing=config.cursor_smoothing,
            )
            if full_desktop and profile.pointer_capable
            else None
        )
        self.glitch = GlitchEngine(
            stage,
            text_probability=config.text_glitch_probability,
            random_probability=config.random_glitch_probability,
        )
        self.text = TextEffects(stage)
        self._started = False
        stage.on_teardown(self.teardown)

    def engines(self) -> list[Any]:
        found: list[Any] = [
            self.reveal,
            self.parallax,
            self.cursor,
            self.counters,
            self.progress,
            self.ambient,
            self.glitch,
            self.text,
        ]
        return [engine for engine in found if engine is not None]

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self.reveal.register()
        if self.parallax is not None:
            self.parallax.start()
        if self.cursor is not None:
            self.cursor.start()
        self.counters.register()
        self.progress.register()
        self.ambient.start()
        self.glitch.start()

    def teardown(self) -> None:
        for engine in self.engines():
            engine.teardown()
        self._started = False
