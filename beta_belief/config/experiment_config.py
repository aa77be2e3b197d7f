from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class PriorConfig(BaseModel):
    """Beta prior over the probability of heads"""

    alpha: float = Field(
        default=1.0,
        gt=0.0,
        description="Prior pseudo-count of heads"
    )
    beta: float = Field(
        default=1.0,
        gt=0.0,
        description="Prior pseudo-count of tails"
    )


class ExperimentConfig(BaseModel):
    """Coin-flip experiment configuration"""

    prior: PriorConfig = Field(
        default_factory=PriorConfig,
        description="Prior belief before any flips"
    )
    true_prob: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Probability of heads used to generate flips"
    )
    total_flips: int = Field(
        default=200,
        ge=1,
        description="Number of flips to generate"
    )
    batch_sizes: List[int] = Field(
        default_factory=lambda: [5, 20, 50],
        min_length=1,
        description="Batch sizes compared in the learning experiment"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )
    grid_points: int = Field(
        default=200,
        ge=2,
        description="Number of grid points used to plot densities"
    )
    credible_level: float = Field(
        default=0.95,
        gt=0.0,
        lt=1.0,
        description="Mass held by reported credible intervals"
    )
    snapshot_counts: List[int] = Field(
        default_factory=lambda: [0, 1, 2, 10, 50, 200],
        description="Flip counts at which the posterior density is plotted"
    )

    @field_validator("batch_sizes")
    @classmethod
    def _positive_batch_sizes(cls, value: List[int]) -> List[int]:
        if any(size < 1 for size in value):
            raise ValueError("batch sizes must be >= 1")
        return value

    @field_validator("snapshot_counts")
    @classmethod
    def _non_negative_counts(cls, value: List[int]) -> List[int]:
        if any(count < 0 for count in value):
            raise ValueError("snapshot counts must be >= 0")
        return sorted(set(value))

    @classmethod
    def from_yaml(cls, path: Path) -> "ExperimentConfig":
        """Load configuration from YAML file"""
        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f)
        return cls.model_validate(config_dict or {})

    def to_yaml(self, path: Path) -> None:
        """Write configuration to YAML file"""
        with open(path, 'w') as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False)
