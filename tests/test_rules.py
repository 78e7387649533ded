import pytest

from falling_block_rl.game import ScoreController, ScoringRules


def test_score_is_linear_in_rows():
    rules = ScoringRules()
    assert rules.score_for_lines(0) == 0
    assert rules.score_for_lines(1) == 10
    assert rules.score_for_lines(4) == 40


def test_drop_time_curve():
    rules = ScoringRules()
    assert rules.drop_time_for_score(0) == 1000
    assert rules.drop_time_for_score(140) == pytest.approx(1000 * 0.995 ** 140)
    assert 490 < rules.drop_time_for_score(140) < 500
    assert rules.drop_time_for_score(10_000) == 100


def test_drop_time_is_non_increasing_and_bounded():
    rules = ScoringRules()
    times = [rules.drop_time_for_score(score) for score in range(0, 2000, 10)]
    assert all(a >= b for a, b in zip(times, times[1:]))
    assert min(times) >= 100
    assert max(times) <= 1000


def test_controller_accumulates_sweeps():
    controller = ScoreController(ScoringRules())
    assert controller.record_sweep(0) == 0
    assert controller.score == 0
    assert controller.drop_interval == 1000
    for _ in range(14):
        assert controller.record_sweep(1) == 10
    assert controller.score == 140
    assert controller.lines_cleared_total == 14
    assert controller.drop_interval == pytest.approx(1000 * 0.995 ** 140)


def test_controller_multi_row_sweep_has_no_bonus():
    controller = ScoreController(ScoringRules())
    assert controller.record_sweep(4) == 40
    assert controller.score == 40


def test_controller_reset():
    controller = ScoreController(ScoringRules())
    controller.record_sweep(3)
    controller.reset()
    assert controller.score == 0
    assert controller.lines_cleared_total == 0
    assert controller.drop_interval == 1000


def test_invalid_rules_rejected():
    with pytest.raises(ValueError):
        ScoringRules(initial_drop_time=100, minimum_drop_time=200)
    with pytest.raises(ValueError):
        ScoringRules(speed_increase_factor=1.5)
