from tools.headless import mean_attractor_distance, run
from attractors import face_pattern
from swarm import ParticleSystem


def test_run_keeps_population_and_reports(capsys):
    system = run(num_particles=20, ticks=10, width=300, height=200, seed=1, every=5)
    assert len(system.particles) == 20
    out = capsys.readouterr().out
    assert out.count("[Headless] tick") == 2
    assert "[Particles] Initialized 20 particles" in out


def test_mean_attractor_distance(rng):
    system = ParticleSystem(max_particles=0, width=300, height=200, rng=rng)
    assert mean_attractor_distance(system, face_pattern(300, 200)) == 0.0
    system.max_particles = 5
    system.update()
    assert mean_attractor_distance(system, face_pattern(300, 200)) > 0.0
