import math

import pytest

from qnmin.optimize import IterationLimitError, bracket_minimum
from qnmin.optimize.bracket import MAX_EXPANSION


def shifted_square(x: float) -> float:
    return (x - 5.0) ** 2


def assert_valid_bracket(br) -> None:
    assert br.a <= br.b <= br.c
    assert br.fa >= br.fb <= br.fc


def test_bracket_contains_minimum():
    br = bracket_minimum(shifted_square, 0.0, 1.0)
    assert_valid_bracket(br)
    assert br.a <= 5.0 <= br.c


def test_bracket_from_reversed_seeds_is_oriented():
    br = bracket_minimum(shifted_square, 1.0, 0.0)
    assert br.a < br.c
    assert_valid_bracket(br)
    assert br.a <= 5.0 <= br.c


def test_bracket_walks_downhill_to_the_left():
    br = bracket_minimum(lambda x: (x + 3.0) ** 2, 0.0, 1.0)
    assert_valid_bracket(br)
    assert br.a <= -3.0 <= br.c


def test_bracket_values_match_function():
    br = bracket_minimum(shifted_square, 0.0, 1.0)
    for x, fx in ((br.a, br.fa), (br.b, br.fb), (br.c, br.fc)):
        assert fx == shifted_square(x)


def test_bracket_far_minimum_uses_capped_expansion():
    # The quadratic estimate is exact, so one extrapolation lands on the minimum
    # as long as it is within the expansion cap.
    assert MAX_EXPANSION == 500.0
    br = bracket_minimum(lambda x: (x - 400.0) ** 2, 0.0, 1.0)
    assert_valid_bracket(br)
    assert br.a <= 400.0 <= br.c


def test_bracket_already_bracketed_seeds():
    # f(0) = f(2) > f(1): the seeds and their reflection bracket immediately.
    br = bracket_minimum(lambda x: (x - 1.0) ** 2, 0.0, 1.0)
    assert (br.a, br.b, br.c) == (0.0, 1.0, 2.0)


def test_bracket_monotone_function_hits_iteration_cap():
    with pytest.raises(IterationLimitError, match="No minimum bracketed"):
        bracket_minimum(lambda x: x, 0.0, 1.0, maxiter=10)



def test_bracket_keeps_last_displaced_bound():
    # 0, 1, 2 -> 1, 2, 5 -> 2, 5, 9: the bound 1 is displaced last.
    br = bracket_minimum(shifted_square, 0.0, 1.0)
    assert (br.a, br.b, br.c) == (2.0, 5.0, 9.0)
    assert (br.d, br.fd) == (1.0, 16.0)


@pytest.mark.parametrize(
    "f",
    [shifted_square, lambda x: (x + 3.0) ** 2, lambda x: (x - 400.0) ** 2],
)
def test_bracket_auxiliary_point_lies_outside(f):
    br = bracket_minimum(f, 0.0, 1.0)
    assert_valid_bracket(br)
    assert math.isfinite(br.d)
    assert br.d < br.a or br.d > br.c
    assert br.fd == f(br.d)
