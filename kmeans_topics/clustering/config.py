"""
K-Means clustering configuration.

Provides Pydantic settings for the clustering engine plus validation of the
``[kmeans]`` table of a TOML configuration file, where every parameter is
required and keys are dash-separated:

    [kmeans]
    max-iters = 1000
    topics = 2
    init-method = "kmeans++"   # or "randk"
    output-terms = 8
    model-prefix = "kmeans-model"
    seed = 42                  # optional

Parameter Tuning Guide:
    - topics: fixed number of clusters; must not exceed the document count.
    - init_method: "kmeans++" spreads the initial centroids out and usually
      converges in fewer iterations than "randk".
    - max_iters: hard ceiling; most corpora converge well before 100.
    - output_terms: 0 disables the topic report.
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kmeans_topics.clustering.errors import MissingConfigError

logger = logging.getLogger(__name__)

# Keys of the [kmeans] table that must be present, in reporting order
REQUIRED_KEYS = ("max-iters", "topics", "output-terms", "init-method", "model-prefix")


class KMeansConfig(BaseSettings):
    """
    Configuration for the K-Means clustering engine.

    All settings can be overridden via environment variables prefixed with KMEANS_.

    Example:
        KMEANS_TOPICS=20
        KMEANS_INIT_METHOD=randk
        KMEANS_RANDOM_SEED=7
    """

    model_config = SettingsConfigDict(
        env_prefix="KMEANS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_iters: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on assignment/update iterations.",
    )
    topics: int = Field(
        default=2,
        ge=1,
        description="Number of clusters to find.",
    )
    init_method: Literal["kmeans++", "randk"] = Field(
        default="kmeans++",
        description="Centroid seeding strategy.",
    )
    output_terms: int = Field(
        default=8,
        ge=0,
        description="Top terms reported per cluster. 0 disables reporting.",
    )
    model_prefix: str = Field(
        default="kmeans-model",
        description="File prefix for the .docs, .centroids and .clusters files.",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for centroid selection. None = fresh OS entropy.",
    )

    @classmethod
    def from_table(cls, table: Mapping[str, Any]) -> "KMeansConfig":
        """
        Build a config from the ``[kmeans]`` table of a TOML file.

        Every key in REQUIRED_KEYS must be present. Each missing key is
        logged before the error is raised, so all of them are reported at once.

        Args:
            table: Parsed ``[kmeans]`` table with dash-separated keys.

        Returns:
            Validated KMeansConfig.

        Raises:
            MissingConfigError: If any required key is absent.
            pydantic.ValidationError: If a value has the wrong type or range.
        """
        missing = [key for key in REQUIRED_KEYS if key not in table]
        for key in missing:
            logger.error(f"Missing kmeans configuration parameter {key}")
        if missing:
            raise MissingConfigError(missing)

        values = {key.replace("-", "_"): table[key] for key in REQUIRED_KEYS}
        if "seed" in table:
            values["random_seed"] = table["seed"]
        return cls(**values)
