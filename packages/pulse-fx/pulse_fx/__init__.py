"""pulse-fx - Scroll, ambient, cursor and glitch effects on the pulse runtime."""
from __future__ import annotations

from pulse_fx.ambient import AmbientEngine, GlyphColumn, GlyphRain, Particle, ParticleGenerator
from pulse_fx.config import EffectsConfig
from pulse_fx.counters import CounterAnimator, CountUp, Fill, ProgressAnimator
from pulse_fx.cursor import CursorState, CursorTrail
from pulse_fx.detector import (
    BenchmarkProbe,
    CapabilityProbe,
    FixedProbe,
    MotionProfile,
    PerformanceTier,
    detect,
)
from pulse_fx.effects import Effects
from pulse_fx.glitch import GlitchEngine, GlitchSession
from pulse_fx.parallax import Parallax
from pulse_fx.reveal import RevealEngine
from pulse_fx.text import TextEffects

__all__ = [
    "Effects",
    "EffectsConfig",
    "MotionProfile",
    "PerformanceTier",
    "CapabilityProbe",
    "BenchmarkProbe",
    "FixedProbe",
    "detect",
    "RevealEngine",
    "CounterAnimator",
    "ProgressAnimator",
    "CountUp",
    "Fill",
    "AmbientEngine",
    "ParticleGenerator",
    "GlyphRain",
    "Particle",
    "GlyphColumn",
    "Parallax",
    "CursorTrail",
    "CursorState",
    "GlitchEngine",
    "GlitchSession",
    "TextEffects",
]
