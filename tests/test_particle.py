import numpy as np
import pytest

from swarm import Particle
from swarm.vector import magnitude


class TestSpawn:
    def test_attributes_fall_in_configured_ranges(self, rng):
        for _ in range(50):
            p = Particle.spawn(10.0, 20.0, rng)
            assert np.array_equal(p.position, [10.0, 20.0])
            assert 0.5 - 1e-9 <= magnitude(p.velocity) <= 2.0 + 1e-9
            assert 3.0 <= p.size <= 8.0
            assert all(150.0 <= c <= 255.0 for c in p.color[:3])
            assert 150.0 <= p.color[3] <= 200.0
            assert 0.5 <= p.decay <= 1.5
            assert p.lifespan == 255.0
            assert not p.is_attracted
            assert np.array_equal(p.acceleration, np.zeros(2))

    def test_opacity_follows_lifespan(self, make_particle):
        p = make_particle(lifespan=127.5)
        assert p.opacity == pytest.approx(0.5)
        p.lifespan = -3.0
        assert p.opacity == 0.0


class TestSeek:
    def test_target_equal_to_position_gives_zero(self, make_particle):
        p = make_particle(position=(50.0, 50.0), velocity=(1.0, 1.0))
        force = p.seek(np.array([50.0, 50.0]))
        assert np.array_equal(force, np.zeros(2))

    def test_target_closer_than_one_unit_gives_zero(self, make_particle):
        p = make_particle(position=(50.0, 50.0))
        assert np.array_equal(p.seek((50.5, 50.0)), np.zeros(2))

    def test_points_toward_target_and_is_clamped(self, make_particle):
        p = make_particle(position=(0.0, 0.0))
        force = p.seek((100.0, 0.0))
        assert force[0] == pytest.approx(p.max_force)
        assert force[1] == pytest.approx(0.0)

    def test_strength_scales_after_clamping(self, make_particle):
        p = make_particle(position=(0.0, 0.0))
        force = p.seek((0.0, 100.0), strength=2.5)
        assert magnitude(force) == pytest.approx(p.max_force * 2.5)

    def test_accepts_three_dimensional_targets(self, make_particle):
        p = make_particle(position=(0.0, 0.0))
        force = p.seek((100.0, 0.0, -30.0))
        assert force.shape == (2,)
        assert force[0] > 0


class TestFlocking:
    def test_empty_neighbors_give_zero(self, make_particle):
        p = make_particle()
        for force in (p.separate([]), p.align([]), p.cohesion([])):
            assert np.array_equal(force, np.zeros(2))

    def test_self_is_excluded(self, make_particle):
        p = make_particle(velocity=(1.0, 0.0))
        for force in (p.separate([p]), p.align([p]), p.cohesion([p])):
            assert np.array_equal(force, np.zeros(2))

    def test_coincident_neighbor_is_ignored(self, make_particle):
        p = make_particle()
        twin = make_particle()
        force = p.separate([p, twin])
        assert np.array_equal(force, np.zeros(2))
        assert not np.isnan(force).any()

    def test_separate_pushes_away_from_close_neighbor(self, make_particle):
        p = make_particle(position=(100.0, 100.0))
        other = make_particle(position=(110.0, 100.0))
        force = p.separate([p, other])
        assert force[0] == pytest.approx(-p.max_force)
        assert force[1] == pytest.approx(0.0)

    def test_separate_ignores_neighbors_out_of_range(self, make_particle):
        p = make_particle(position=(100.0, 100.0))
        other = make_particle(position=(125.0, 100.0))  # Exactly at the threshold
        assert np.array_equal(p.separate([other]), np.zeros(2))

    def test_align_steers_toward_neighbor_heading(self, make_particle):
        p = make_particle(position=(100.0, 100.0))
        other = make_particle(position=(120.0, 100.0), velocity=(2.0, 0.0))
        far = make_particle(position=(300.0, 100.0), velocity=(0.0, -2.0))
        force = p.align([p, other, far])
        assert force[0] == pytest.approx(p.max_force)
        assert force[1] == pytest.approx(0.0)

    def test_align_with_still_neighbors_brakes(self, make_particle):
        p = make_particle(position=(100.0, 100.0), velocity=(1.0, 0.0))
        other = make_particle(position=(120.0, 100.0))
        force = p.align([other])
        assert force[0] == pytest.approx(-p.max_force)
        assert not np.isnan(force).any()

    def test_cohesion_seeks_center_at_half_strength(self, make_particle):
        p = make_particle(position=(100.0, 100.0))
        a = make_particle(position=(140.0, 90.0))
        b = make_particle(position=(140.0, 110.0))
        force = p.cohesion([p, a, b])
        assert force[0] == pytest.approx(p.max_force * 0.5)
        assert force[1] == pytest.approx(0.0)

    def test_forces_never_exceed_max_force(self, rng):
        particles = [
            Particle.spawn(rng.uniform(0, 200), rng.uniform(0, 200), rng)
            for _ in range(60)
        ]
        for p in particles:
            p.velocity = rng.uniform(-4, 4, size=2)
        for p in particles:
            for force in (p.separate(particles), p.align(particles),
                          p.cohesion(particles), p.borders(200, 200),
                          p.seek(rng.uniform(0, 200, size=2))):
                assert magnitude(force) <= p.max_force + 1e-12


class TestBorders:
    def test_left_edge_pushes_right(self, make_particle):
        p = make_particle(position=(5.0, 300.0), velocity=(-3.0, 0.0))
        force = p.borders(800, 600)
        assert magnitude(force) > 0
        assert force[0] > 0

    def test_bottom_edge_pushes_up(self, make_particle):
        p = make_particle(position=(400.0, 590.0))
        force = p.borders(800, 600)
        assert force[0] == pytest.approx(0.0)
        assert force[1] == pytest.approx(-p.max_force)

    def test_interior_gives_zero(self, make_particle):
        p = make_particle(position=(400.0, 300.0), velocity=(2.0, 1.0))
        assert np.array_equal(p.borders(800, 600), np.zeros(2))

    def test_horizontal_correction_wins_in_corner(self, make_particle):
        # x correction keeps vy = 2, so the steer slightly reduces vy
        p = make_particle(position=(10.0, 10.0), velocity=(1.0, 2.0))
        force = p.borders(800, 600)
        assert force[0] > 0
        assert force[1] < 0


class TestUpdate:
    def test_speed_is_clamped_and_acceleration_reset(self, make_particle):
        p = make_particle(position=(0.0, 0.0), velocity=(3.0, 0.0))
        p.apply_force(np.array([5.0, 0.0]))
        p.update()
        assert np.allclose(p.velocity, [4.0, 0.0])
        assert np.allclose(p.position, [4.0, 0.0])
        assert np.array_equal(p.acceleration, np.zeros(2))

    def test_apply_force_accumulates(self, make_particle):
        p = make_particle()
        p.apply_force(np.array([0.1, 0.0]))
        p.apply_force(np.array([0.0, 0.2]))
        assert np.allclose(p.acceleration, [0.1, 0.2])

    def test_unattracted_particle_decays(self, make_particle):
        p = make_particle(decay=1.25)
        p.update()
        assert p.lifespan == pytest.approx(255.0 - 1.25)

    def test_attracted_particle_regenerates_at_double_rate(self, make_particle):
        p = make_particle(lifespan=200.0, decay=1.0, is_attracted=True)
        p.update()
        assert p.lifespan == pytest.approx(202.0)

    def test_regeneration_is_capped(self, make_particle):
        p = make_particle(lifespan=254.5, decay=1.0, is_attracted=True)
        p.update()
        assert p.lifespan == 255.0

    def test_is_dead_at_zero(self, make_particle):
        p = make_particle(lifespan=1.0, decay=1.0)
        assert not p.is_dead()
        p.update()
        assert p.lifespan == 0.0
        assert p.is_dead()

    def test_speed_bound_holds_under_random_forces(self, rng, make_particle):
        p = make_particle()
        for _ in range(200):
            p.apply_force(rng.uniform(-10, 10, size=2))
            p.update()
            assert magnitude(p.velocity) <= p.max_speed + 1e-9
