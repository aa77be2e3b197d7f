import pytest
from pydantic import ValidationError

from beta_belief.config.experiment_config import ExperimentConfig, PriorConfig


def test_defaults():
    config = ExperimentConfig()
    assert config.prior == PriorConfig(alpha=1.0, beta=1.0)
    assert config.true_prob == 0.7
    assert config.total_flips == 200
    assert config.batch_sizes == [5, 20, 50]
    assert config.random_seed is None


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    config = ExperimentConfig(
        prior=PriorConfig(alpha=2, beta=3),
        true_prob=0.4,
        total_flips=50,
        batch_sizes=[1, 10],
        random_seed=7,
    )
    config.to_yaml(path)
    assert ExperimentConfig.from_yaml(path) == config


def test_partial_yaml_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("true_prob: 0.9\nprior:\n  alpha: 4\n")
    config = ExperimentConfig.from_yaml(path)
    assert config.true_prob == 0.9
    assert config.prior.alpha == 4.0
    assert config.prior.beta == 1.0


def test_snapshot_counts_sorted_and_unique():
    config = ExperimentConfig(snapshot_counts=[10, 0, 10, 3])
    assert config.snapshot_counts == [0, 3, 10]


@pytest.mark.parametrize(
    "overrides",
    [
        {"prior": {"alpha": 0}},
        {"prior": {"beta": -1}},
        {"true_prob": 1.5},
        {"total_flips": 0},
        {"batch_sizes": []},
        {"batch_sizes": [5, 0]},
        {"grid_points": 1},
        {"credible_level": 1.0},
        {"snapshot_counts": [-1]},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ValidationError):
        ExperimentConfig.model_validate(overrides)
