import pytest

from beta_belief.core.belief import BetaBelief
from beta_belief.experiments.batch_experiment import BatchExperiment
from beta_belief.utils.belief_visualizer import BeliefVisualizer


@pytest.fixture
def visualizer():
    return BeliefVisualizer(grid_points=50)


def test_plot_posterior_evolution(visualizer, tmp_path):
    beliefs = {0: BetaBelief(1, 1), 3: BetaBelief(3, 2), 100: BetaBelief(71, 31)}
    path = visualizer.plot_posterior_evolution(beliefs, tmp_path / "posterior.png", true_prob=0.7)
    assert path == tmp_path / "posterior.png"
    assert path.stat().st_size > 0


def test_plot_learning_curves(visualizer, tmp_path):
    results = BatchExperiment(true_prob=0.6, total_flips=40).compare([5, 20], seed=3)
    path = visualizer.plot_learning_curves(results, tmp_path / "curves.png", true_prob=0.6)
    assert path.exists()


def test_empty_input_returns_none(visualizer, tmp_path):
    assert visualizer.plot_posterior_evolution({}, tmp_path / "none.png") is None
    assert visualizer.plot_learning_curves({}, tmp_path / "none.png") is None
    assert not (tmp_path / "none.png").exists()


def test_unwritable_path_raises_ioerror(visualizer, tmp_path):
    with pytest.raises(IOError):
        visualizer.plot_posterior_evolution(
            {0: BetaBelief(1, 1)}, tmp_path / "missing" / "dir" / "plot.png"
        )
