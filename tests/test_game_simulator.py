from scriptsims import GameOutcome, Pose, SessionOutcome, TurtleGameSimulator
from scriptsims.simulators import GAME_MESSAGES, GAME_START_MESSAGE, INVALID_MOVE_MESSAGE


def make_game(view, target):
    sim = TurtleGameSimulator(renderer=view, highlighter=view, notifier=view, rng_seed=7)
    placed = sim.play()
    assert placed is not None
    sim.world.target = target
    return sim


def test_play_places_apple_and_notifies(view):
    sim = TurtleGameSimulator(notifier=view, rng_seed=3)
    target = sim.play()
    assert sim.playing
    assert sim.world.target == target
    assert target != (0, 0)
    assert view.messages == [GAME_START_MESSAGE]


def test_reaching_apple_wins_and_ends_game(view, sleeps):
    sim = make_game(view, (3, 0))
    report = sim.run("ANDA 3", sleep=sleeps)
    assert report.outcome is SessionOutcome.COMPLETED
    assert report.game_outcome is GameOutcome.WIN
    assert view.messages[-1] == GAME_MESSAGES[GameOutcome.WIN]
    assert not sim.playing
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)


def test_missing_apple_loses_and_ends_game(view, sleeps):
    sim = make_game(view, (3, 0))
    report = sim.run("ANDA 2", sleep=sleeps)
    assert report.game_outcome is GameOutcome.LOSE
    assert view.messages[-1] == GAME_MESSAGES[GameOutcome.LOSE]
    assert not sim.playing


def test_diagonal_path_to_apple(sleeps):
    sim = TurtleGameSimulator(rng_seed=1)
    sim.play()
    sim.world.target = (2, 2)
    report = sim.run("DIREITA 45\nANDA 2.8284", sleep=sleeps)
    assert report.game_outcome is GameOutcome.WIN


def test_invalid_move_skips_evaluation_and_keeps_playing(view, sleeps):
    sim = make_game(view, (3, 0))
    report = sim.run("ANDA 3\nESQUERDA 90\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.INVALID_MOVE
    assert report.game_outcome is None
    assert view.messages[-1] == INVALID_MOVE_MESSAGE
    assert sim.playing
    assert sim.world.target == (3, 0)


def test_reset_mid_run_skips_evaluation(view, sleeps):
    sim = make_game(view, (1, 0))
    sleeps.on_call(2, sim.reset)
    report = sim.run("ANDA 1\nANDA 1", sleep=sleeps)
    assert report.outcome is SessionOutcome.CANCELLED
    assert report.game_outcome is None
    assert view.messages == [GAME_START_MESSAGE]
    assert not sim.playing
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)


def test_run_outside_play_is_not_judged(view, sleeps):
    sim = TurtleGameSimulator(notifier=view)
    report = sim.run("ANDA 1", sleep=sleeps)
    assert report.game_outcome is None
    assert view.messages == []
    assert sim.world.x == 1.0


def test_game_pacing_uses_shorter_wrap_up(sleeps):
    sim = TurtleGameSimulator()
    sim.run("ANDA 1", sleep=sleeps)
    assert sleeps.calls == [0.5, 0.6, 0.5]


def test_play_ignored_while_running(sleeps):
    sim = TurtleGameSimulator(rng_seed=2)
    results = []
    sleeps.on_call(1, lambda: results.append(sim.play()))
    sim.run("ANDA 1", sleep=sleeps)
    assert results == [None]
    assert not sim.playing


def test_play_resets_previous_position(sleeps):
    sim = TurtleGameSimulator(rng_seed=4)
    sim.run("ANDA 2", sleep=sleeps)
    sim.play()
    assert sim.world.pose == Pose(0.0, 0.0, 90.0)


def test_overflowing_move_is_not_judged(view, sleeps):
    sim = make_game(view, (3, 0))
    report = sim.run("ANDA 1E400", sleep=sleeps)
    assert report.outcome is SessionOutcome.INVALID_MOVE
    assert report.game_outcome is None
    assert sim.playing
