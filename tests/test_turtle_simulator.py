import pytest

from scriptsims import Pose, SessionOutcome, Timing, TurtleConfig, TurtleSimulator
from scriptsims.simulators import INVALID_MOVE_MESSAGE
from scriptsims.stepper import Pause


def make_sim(view, **kwargs):
    return TurtleSimulator(renderer=view, highlighter=view, notifier=view, **kwargs)


def test_missing_operand_is_a_zero_move(view, sleeps):
    sim = make_sim(view)
    report = sim.run("ANDA\nDIREITA 90\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.COMPLETED
    assert report.steps == 3
    pose = sim.world.pose
    assert (pose.x, pose.y) == pytest.approx((0.0, 1.0), abs=1e-9)
    assert pose.heading == 180.0
    assert view.messages == []


def test_out_of_bounds_move_halts_the_run(view, sleeps):
    sim = make_sim(view)
    report = sim.run("ANDA 10\nDIREITA 90\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.INVALID_MOVE
    assert report.error_line == 0
    assert report.steps == 1
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)
    assert view.messages == [INVALID_MOVE_MESSAGE]
    assert view.of("error") == [0]
    assert view.of("active") == [0]
    # pre-run, error hold, post-run
    assert sleeps.calls == [0.5, 1.0, 1.0]
    assert not sim.running


def test_pacing_per_line_kind(sleeps):
    sim = TurtleSimulator()
    sim.run("ANDA 1\n\nPULA 3\nDIREITA 90", sleep=sleeps)
    assert sleeps.calls == [0.5, 0.6, 0.1, 0.2, 0.6, 1.0]


def test_backwards_and_left_commands(sleeps):
    sim = TurtleSimulator()
    sim.run("ANDA 4\nTRAS 1\nTRÁS 1\nESQUERDA 90\nDIREITA 180\nANDA 2", sleep=sleeps)
    pose = sim.world.pose
    assert (pose.x, pose.y) == pytest.approx((2.0, 2.0), abs=1e-9)
    assert pose.heading == 180.0


def test_every_run_starts_from_initial_pose(sleeps):
    sim = TurtleSimulator()
    sim.run("ANDA 3", sleep=sleeps)
    assert sim.world.x == pytest.approx(3.0)
    sim.run("ANDA 1", sleep=sleeps)
    assert sim.world.x == pytest.approx(1.0)


def test_collaborator_call_order(view, sleeps):
    sim = make_sim(view)
    sim.run("DIREITA 90", sleep=sleeps)
    names = [name for name, _ in view.events]
    assert names == ["render", "show_script", "render", "active", "render", "inactive", "clear"]
    assert view.renders[-1] == Pose(0.0, 0.0, 180.0)


def test_failed_move_does_not_render(view, sleeps):
    sim = make_sim(view)
    sim.run("ANDA 10", sleep=sleeps)
    names = [name for name, _ in view.events]
    assert names == ["render", "show_script", "render", "active", "error", "notify", "clear"]


def test_reset_mid_run_cancels_session(view, sleeps):
    sim = make_sim(view)
    sleeps.on_call(2, sim.reset)
    report = sim.run("ANDA 1\nANDA 1\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.CANCELLED
    assert report.steps == 1
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)
    # no post-run pause once cancelled
    assert sleeps.calls == [0.5, 0.6]
    assert not sim.running
    assert sim.last_report == report


def test_concurrent_run_request_is_ignored(sleeps):
    sim = TurtleSimulator()
    nested = []
    sleeps.on_call(2, lambda: nested.append(sim.run("ANDA 5", sleep=sleeps)))
    report = sim.run("ANDA 1\nANDA 1", sleep=sleeps)
    assert nested == [None]
    assert report.outcome is SessionOutcome.COMPLETED
    assert sim.world.x == pytest.approx(2.0)


def test_manual_stepping_with_start():
    sim = TurtleSimulator()
    steps = sim.start("ANDA 2\n\nDIREITA 90")
    assert sim.running
    assert sim.start("ANDA 1") is None
    first = next(steps)
    assert first == Pause(500.0)
    rest = list(steps)
    assert [p.line_index for p in rest] == [0, 1, 2, None]
    assert [p.ms for p in rest] == [600.0, 100.0, 600.0, 1000.0]
    assert not sim.running
    assert sim.last_report.outcome is SessionOutcome.COMPLETED


def test_cancelled_generator_stops_without_touching_world():
    sim = TurtleSimulator()
    steps = sim.start("ANDA 1\nANDA 1")
    next(steps)
    next(steps)
    sim.reset()
    assert list(steps) == []
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)


def test_new_run_allowed_after_reset(sleeps):
    sim = TurtleSimulator()
    old = sim.start("ANDA 1\nANDA 1")
    next(old)
    sim.reset()
    report = sim.run("ANDA 3", sleep=sleeps)
    assert report.outcome is SessionOutcome.COMPLETED
    # resuming the stale generator must not disturb the new state
    assert list(old) == []
    assert sim.world.x == pytest.approx(3.0)


def test_custom_grid_and_instant_timing(sleeps):
    config = TurtleConfig(grid_size=3, timing=Timing.turtle().scaled(0))
    sim = TurtleSimulator(config)
    report = sim.run("ANDA 2\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.INVALID_MOVE
    assert report.error_line == 1
    assert set(sleeps.calls) == {0.0}


def test_collaborator_errors_propagate_and_release_session(sleeps):
    class Exploding:
        def render(self, world):
            if world.heading != 90.0:
                raise RuntimeError("boom")

    sim = TurtleSimulator(renderer=Exploding())
    with pytest.raises(RuntimeError):
        sim.run("DIREITA 90", sleep=sleeps)
    assert not sim.running


@pytest.mark.parametrize("script", ["ANDA 1E400\nANDA 1", "TRAS 1E400\nANDA 1"])
def test_overflowing_distance_is_an_invalid_move(view, sleeps, script):
    sim = make_sim(view)
    report = sim.run(script, sleep=sleeps)
    assert report.outcome is SessionOutcome.INVALID_MOVE
    assert report.error_line == 0
    assert report.steps == 1
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)
    assert view.messages == [INVALID_MOVE_MESSAGE]


def test_overflowing_turn_is_a_zero_turn(sleeps):
    sim = TurtleSimulator()
    report = sim.run("DIREITA 1E400\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.COMPLETED
    assert sim.world.pose == Pose(1.0, 0.0, 90.0)


def test_blank_lines_count_as_steps(sleeps):
    sim = TurtleSimulator()
    report = sim.run("ANDA 1\n\n\nDIREITA 90", sleep=sleeps)
    assert report.steps == 4
