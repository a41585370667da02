from __future__ import annotations

from hranalytics.core.rates import mean, percentage, round_half_up, safe_ratio, spread


def test_percentage_guards_and_clamps():
    assert percentage(1, 0) == 0.0
    assert percentage(1, 3) == 33.3
    assert percentage(5, 4) == 100.0


def test_round_half_up():
    assert round_half_up(20.5) == 21.0
    assert round_half_up(0.5) == 1.0
    assert round_half_up(84.4) == 84.0
    assert round_half_up(12.25, 1) == 12.3


def test_mean_ratio_and_spread():
    assert mean([]) == 0.0
    assert mean([1, 2]) == 1.5
    assert safe_ratio(400.0, 4) == 100.0
    assert safe_ratio(62.5, 0) == 0.0
    assert spread([40.0]) == 0.0
    assert spread([40.0, 70.0, 61.0]) == 30.0
