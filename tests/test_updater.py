import itertools
import math

import numpy as np
import pytest
from scipy import integrate, stats

from beta_belief.core.belief import BetaBelief
from beta_belief.core.errors import (
    DomainError,
    InvalidObservationError,
    InvalidParameterError,
)
from beta_belief.core.updater import ConjugateBetaBernoulliUpdater


@pytest.fixture
def updater():
    """Fixture to provide a fresh updater for each test."""
    return ConjugateBetaBernoulliUpdater()


@pytest.fixture
def uniform(updater):
    return updater.initialize(1, 1)


def test_initialize(updater):
    belief = updater.initialize(2.5, 4)
    assert belief == BetaBelief(2.5, 4.0)


@pytest.mark.parametrize("alpha,beta", [(0, 1), (1, -1)])
def test_initialize_rejects_non_positive(updater, alpha, beta):
    with pytest.raises(InvalidParameterError):
        updater.initialize(alpha, beta)


def test_two_heads_one_tail(updater, uniform):
    posterior = updater.update(uniform, [True, True, False])
    assert posterior == BetaBelief(3, 2)
    assert updater.mean(posterior) == pytest.approx(0.6)
    assert updater.variance(posterior) == pytest.approx(0.04)


def test_fifty_heads_in_hundred(updater, uniform):
    flips = [True] * 50 + [False] * 50
    np.random.default_rng(7).shuffle(flips)
    posterior = updater.update(uniform, flips)
    assert posterior == BetaBelief(51, 51)
    assert updater.mean(posterior) == pytest.approx(0.5)


def test_update_is_order_independent(updater):
    prior = updater.initialize(2, 3)
    flips = (True, True, False, True, False)
    results = {updater.update(prior, list(p)) for p in itertools.permutations(flips)}
    assert results == {BetaBelief(5, 5)}


def test_update_does_not_mutate_input(updater, uniform):
    updater.update(uniform, [True, False, True])
    assert uniform == BetaBelief(1, 1)


def test_empty_update_is_noop(updater):
    prior = updater.initialize(4, 7)
    assert updater.update(prior, []) == prior


@pytest.mark.parametrize("alpha,beta", [(1, 1), (5, 5), (0.5, 3), (40, 2)])
def test_single_observation_moves_mean(updater, alpha, beta):
    belief = updater.initialize(alpha, beta)
    assert updater.mean(updater.update(belief, [True])) > updater.mean(belief)
    assert updater.mean(updater.update(belief, [False])) < updater.mean(belief)


@pytest.mark.parametrize("flips", [[True] * 30, [False] * 30, [True, False] * 15])
def test_variance_shrinks_with_more_data(updater, uniform, flips):
    variances = [updater.variance(b) for b in updater.replay(uniform, flips)]
    assert all(later < earlier for earlier, later in zip(variances, variances[1:]))


def test_variance_bounded_by_observation_count(updater, uniform):
    flips = np.random.default_rng(1).random(200) < 0.3
    for n, belief in enumerate(updater.replay(uniform, flips)):
        # ab / (a + b)^2 never exceeds 1/4
        assert updater.variance(belief) <= 1.0 / (4.0 * (n + 3)) + 1e-12


def test_contrarian_flip_can_raise_variance(updater):
    skewed = updater.initialize(5, 1)
    assert updater.variance(updater.update(skewed, [False])) > updater.variance(skewed)


def test_update_accepts_numpy_and_integers(updater, uniform):
    assert updater.update(uniform, np.array([True, False, True])) == BetaBelief(3, 2)
    assert updater.update(uniform, [1, 0, 0]) == BetaBelief(2, 3)


@pytest.mark.parametrize("bad", [[True, 2], [0.5], ["H"], "HHT", None])
def test_update_rejects_non_binary(updater, uniform, bad):
    with pytest.raises(InvalidObservationError):
        updater.update(uniform, bad)


@pytest.mark.parametrize("alpha,beta", [(1, 1), (2, 5), (3, 2), (100, 100), (500, 300)])
def test_density_integrates_to_one(updater, alpha, beta):
    grid, values = updater.density_curve(BetaBelief(alpha, beta), 20001)
    assert integrate.trapezoid(values, grid) == pytest.approx(1.0, abs=1e-3)


@pytest.mark.parametrize("alpha,beta,p", [(3, 2, 0.4), (100, 100, 0.5), (0.5, 0.5, 0.2), (2000, 1000, 0.66)])
def test_density_matches_scipy(updater, alpha, beta, p):
    belief = BetaBelief(alpha, beta)
    assert updater.density(belief, p) == pytest.approx(stats.beta.pdf(p, alpha, beta), rel=1e-9)


def test_density_stays_finite_for_large_counts(updater):
    belief = BetaBelief(50_000, 50_000)
    value = updater.density(belief, 0.5)
    assert math.isfinite(value)
    assert value > 0
    assert updater.density(belief, 0.1) == 0.0


def test_density_at_endpoints(updater):
    assert updater.density(BetaBelief(1, 1), 0.0) == pytest.approx(1.0)
    assert updater.density(BetaBelief(1, 1), 1.0) == pytest.approx(1.0)
    assert updater.density(BetaBelief(3, 2), 0.0) == 0.0
    assert updater.density(BetaBelief(3, 2), 1.0) == 0.0
    assert updater.density(BetaBelief(0.5, 2), 0.0) == math.inf
    assert updater.log_density(BetaBelief(3, 2), 0.0) == -math.inf


def test_density_near_zero_with_small_alpha_is_infinite(updater):
    belief = updater.initialize(0.01, 1)
    assert updater.log_density(belief, 5e-324) > 709
    assert updater.density(belief, 5e-324) == math.inf
    assert math.isfinite(updater.density(belief, 1e-3))


@pytest.mark.parametrize("p", [1.5, -0.1, math.nan, "half"])
def test_density_outside_unit_interval(updater, uniform, p):
    with pytest.raises(DomainError):
        updater.density(uniform, p)


def test_density_curve_rejects_small_grid(updater, uniform):
    with pytest.raises(InvalidParameterError):
        updater.density_curve(uniform, 1)


def test_credible_interval(updater):
    belief = BetaBelief(51, 51)
    lower, upper = updater.credible_interval(belief, 0.95)
    assert lower < 0.5 < upper
    assert upper - lower == pytest.approx(2 * (0.5 - lower))
    narrow = updater.credible_interval(belief, 0.5)
    assert narrow[1] - narrow[0] < upper - lower


@pytest.mark.parametrize("level", [0, 1, 1.2, -0.3])
def test_credible_interval_rejects_bad_level(updater, uniform, level):
    with pytest.raises(InvalidParameterError):
        updater.credible_interval(uniform, level)


def test_replay_prefixes(updater, uniform):
    flips = [True, False, True, True]
    beliefs = updater.replay(uniform, flips)
    assert len(beliefs) == len(flips) + 1
    assert beliefs[0] == uniform
    for n, belief in enumerate(beliefs):
        assert belief == updater.update(uniform, flips[:n])


def test_replay_empty(updater, uniform):
    assert updater.replay(uniform, []) == [uniform]


def test_replay_batches(updater, uniform):
    flips = [True] * 7 + [False] * 5
    beliefs = updater.replay_batches(uniform, flips, 5)
    assert beliefs == [
        BetaBelief(1, 1),
        BetaBelief(6, 1),
        BetaBelief(8, 4),
        BetaBelief(8, 6),
    ]
    assert beliefs[-1] == updater.update(uniform, flips)


def test_replay_batches_rejects_zero_batch(updater, uniform):
    with pytest.raises(InvalidParameterError):
        updater.replay_batches(uniform, [True], 0)
