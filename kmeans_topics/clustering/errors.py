"""Exceptions raised by the K-Means clustering engine."""


class KMeansError(Exception):
    """Base class for clustering failures."""


class InvalidConfigurationError(KMeansError, ValueError):
    """A clustering parameter is unsupported or out of range."""


class MissingConfigError(InvalidConfigurationError):
    """One or more required configuration keys are absent."""

    def __init__(self, missing_keys: list[str]):
        self.missing_keys = list(missing_keys)
        super().__init__(
            "Missing kmeans configuration parameter(s): "
            + ", ".join(self.missing_keys)
        )


class EmptyClusterError(KMeansError):
    """An update pass found a cluster with no assigned documents."""

    def __init__(self, cluster_id: int):
        self.cluster_id = cluster_id
        super().__init__(f"cannot compute mean of empty cluster {cluster_id}")
