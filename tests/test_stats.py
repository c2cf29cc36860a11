import pytest

from benchtime.stats import OUTLIER_THRESHOLD, maximum, minimum, modified_zscores, num_outliers

NORMAL_SAMPLE = [
    2.33269488,
    1.42195907,
    -0.57527698,
    -0.31293437,
    2.2948158,
    0.75813273,
    -1.0712388,
    -0.96394741,
    -1.15897446,
    1.10976285,
]


@pytest.mark.parametrize(
    "xs, expected",
    [
        ([], 0),
        ([50.0], 0),
        ([1000.0, 0.0], 0),
        ([-0.2, 0.0, 0.2], 0),
        ([-0.2, 0.0, 0.2, 4.0], 1),
        ([0.5, 0.30, 0.29, 0.31, 0.30], 1),
        (NORMAL_SAMPLE, 0),
        (NORMAL_SAMPLE + [20.0, -500.0], 2),
    ],
)
def test_detect_outliers(xs, expected):
    assert num_outliers(xs) == expected


def test_detect_outliers_if_mad_becomes_0():
    assert num_outliers([10.0] * 7 + [100.0]) == 1
    assert num_outliers([10.0] * 7 + [100.0, 100.0]) == 2


def test_modified_zscores_median_point_is_zero():
    scores = modified_zscores([-0.2, 0.0, 0.2])
    assert len(scores) == 3
    assert scores[1] == 0.0
    assert scores[0] == -scores[2]


def test_modified_zscores_empty_raises():
    with pytest.raises(ValueError):
        modified_zscores([])


def test_scores_compared_against_threshold():
    scores = modified_zscores([10.0] * 7 + [100.0])
    assert all(s == 0.0 for s in scores[:-1])
    assert abs(scores[-1]) > OUTLIER_THRESHOLD


@pytest.mark.parametrize(
    "vals, expected",
    [
        ([1.0], 1.0),
        ([-1.0], -1.0),
        ([-2.0, -1.0], -1.0),
        ([-1.0, 1.0], 1.0),
        ([-1.0, 1.0, 0.0], 1.0),
    ],
)
def test_max(vals, expected):
    assert abs(maximum(vals) - expected) < 1e-12


def test_min_is_member_and_not_greater_than_max():
    vals = [3.5, -2.25, 7.0, 0.0]
    assert minimum(vals) in vals
    assert minimum(vals) <= maximum(vals)
    assert all(minimum(vals) <= v for v in vals)


@pytest.mark.parametrize("func", [maximum, minimum])
def test_min_max_reject_bad_input(func):
    with pytest.raises(ValueError):
        func([])
    with pytest.raises(ValueError):
        func([1.0, float("nan")])