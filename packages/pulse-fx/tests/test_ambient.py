"""Tests for particles, glyph columns and ambient gating."""
from pulse import Stage

from pulse_fx import AmbientEngine, EffectsConfig, GlyphRain, MotionProfile, ParticleGenerator
from pulse_fx.ambient import GLYPHS


def profile(reduced=False, mobile=False, low=False):
    return MotionProfile(reduced_motion=reduced, is_mobile=mobile, is_low_performance=low)


class TestParticles:
    def test_first_batch_spawns_immediately(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage, batch_size=10)
        gen.start()
        layer = gen.layer
        assert stage.surface.has_class(layer, "particle-system")
        assert gen.live_count() == 10
        assert len(stage.surface.descendants(layer, "particle")) == 10

    def test_particle_attributes_in_range(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage)
        gen.start()
        for eid, particle in gen.particles.items():
            assert 0 <= particle.horizontal_position < 100
            assert 3 <= particle.lifetime_seconds < 7
            assert 0 <= particle.delay_seconds < 3
            style = stage.surface.get(eid).style
            assert style["left"].endswith("%")
            assert style["animation-duration"].endswith("s")

    def test_particles_removed_after_ttl(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage)
        gen.start()
        stage.advance(7999)
        assert gen.live_count() == 10
        stage.advance(1)
        assert gen.live_count() == 0
        assert stage.surface.query("particle") == []

    def test_batches_on_interval(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage)
        gen.start()
        stage.advance(15000)
        assert gen.live_count() == 10
        stage.advance(15000)
        assert gen.live_count() == 10

    def test_population_bounded(self):
        for batch, bound in ((5, 10), (10, 20)):
            stage = Stage(seed=42)
            gen = ParticleGenerator(stage, batch_size=batch)
            gen.start()
            peak = 0
            for _ in range(240):
                stage.advance(250)
                peak = max(peak, len(stage.surface.query("particle")))
            assert 0 < peak <= bound

    def test_start_twice_is_single_layer(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage)
        gen.start()
        gen.start()
        assert len(stage.surface.query("particle-system")) == 1

    def test_teardown_removes_layer(self):
        stage = Stage(seed=42)
        gen = ParticleGenerator(stage)
        gen.start()
        gen.teardown()
        assert stage.surface.query("particle-system") == []
        assert stage.surface.query("particle") == []
        stage.advance(30000)
        assert stage.surface.query("particle") == []


class TestGlyphRain:
    def test_fifty_columns_of_twenty_glyphs(self):
        stage = Stage(seed=42)
        rain = GlyphRain(stage)
        rain.start()
        columns = stage.surface.query("matrix-column")
        assert len(columns) == 50
        for eid, column in rain.column_records.items():
            assert len(column.glyphs) == 20
            assert all(ch in GLYPHS for ch in column.glyphs)
            assert 2 <= column.fall_seconds < 5
            assert 0 <= column.delay_seconds < 2
            assert stage.surface.get(eid).text.split("\n") == list(column.glyphs)

    def test_created_once(self):
        stage = Stage(seed=42)
        rain = GlyphRain(stage)
        rain.start()
        rain.start()
        stage.advance(10000)
        assert len(stage.surface.query("matrix-column")) == 50

    def test_seeded_columns_reproducible(self):
        a, b = Stage(seed=3), Stage(seed=3)
        GlyphRain(a).start()
        GlyphRain(b).start()
        texts = lambda st: [st.surface.get(e).text for e in st.surface.query("matrix-column")]
        assert texts(a) == texts(b)


class TestGating:
    def test_full_profile_runs_both(self):
        stage = Stage(seed=42)
        engine = AmbientEngine(stage, profile())
        engine.start()
        assert engine.particles.batch_size == 10
        assert len(stage.surface.query("matrix-column")) == 50

    def test_mobile_has_small_batches_and_no_glyphs(self):
        stage = Stage(seed=42)
        engine = AmbientEngine(stage, profile(mobile=True))
        engine.start()
        assert engine.glyphs is None
        assert len(stage.surface.query("particle")) == 5

    def test_reduced_motion_runs_nothing(self):
        stage = Stage(seed=42)
        engine = AmbientEngine(stage, profile(reduced=True))
        engine.start()
        stage.advance(60000)
        assert engine.particles is None and engine.glyphs is None
        assert stage.surface.query("particle") == []
        assert stage.surface.query("matrix-column") == []

    def test_low_performance_runs_nothing(self):
        stage = Stage(seed=42)
        engine = AmbientEngine(stage, profile(low=True))
        engine.start()
        assert len(stage.surface) == 1

    def test_config_overrides(self):
        stage = Stage(seed=42)
        config = EffectsConfig(desktop_particles=3, glyph_columns=7)
        engine = AmbientEngine(stage, profile(), config)
        engine.start()
        assert len(stage.surface.query("particle")) == 3
        assert len(stage.surface.query("matrix-column")) == 7

    def test_teardown(self):
        stage = Stage(seed=42)
        engine = AmbientEngine(stage, profile())
        engine.start()
        engine.teardown()
        assert len(stage.surface) == 1
