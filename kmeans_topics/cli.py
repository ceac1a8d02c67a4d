"""
Command-line interface for kmeans-topics.

Provides commands to cluster a line corpus into topics and to inspect
a saved model.

Usage:
    kmeans-topics run config.toml        # Cluster the configured corpus
    kmeans-topics run config.toml --seed 7
    kmeans-topics show kmeans-model      # Summarize a saved model
"""

import sys
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from kmeans_topics.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)

if TYPE_CHECKING:
    from kmeans_topics.clustering.config import KMeansConfig


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """kmeans-topics - K-Means topic clustering of text corpora."""
    setup_logging("DEBUG" if debug else None)


def _fail(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


def _resolve(path: str, base: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else base / candidate


@main.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", default=None, type=int, help="Random seed (overrides [kmeans] seed)")
def run(config_file: str, seed: int | None) -> None:
    """Cluster the corpus named in CONFIG_FILE.

    CONFIG_FILE is TOML with a top-level `corpus` (one document per line),
    an optional `stop-words` file, and a [kmeans] table holding max-iters,
    topics, init-method, output-terms, and model-prefix.

    Example:
        kmeans-topics run config.toml
        kmeans-topics run config.toml --seed 42
    """
    from kmeans_topics.clustering.config import KMeansConfig
    from kmeans_topics.clustering.errors import KMeansError
    from kmeans_topics.vectors.provider import load_line_corpus, load_stop_words

    base_dir = Path(config_file).resolve().parent

    with open(config_file, "rb") as f:
        try:
            settings: dict[str, Any] = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            _fail(f"Invalid config file {config_file}: {e}")

    errors: list[str] = []
    if "corpus" not in settings:
        errors.append("Missing corpus path in config")
    if "kmeans" not in settings:
        errors.append("Missing kmeans configuration group in config")
    else:
        try:
            config = KMeansConfig.from_table(settings["kmeans"])
        except KMeansError as e:
            errors.append(str(e))
        except ValidationError as e:
            errors.append(f"Invalid kmeans configuration:\n{e}")
    if errors:
        _fail("\n".join(errors))

    if seed is not None:
        config.random_seed = seed

    corpus_path = _resolve(settings["corpus"], base_dir)
    try:
        texts = load_line_corpus(corpus_path)
    except OSError as e:
        _fail(f"Failed to read corpus {corpus_path}: {e}")

    stop_words = None
    if "stop-words" in settings:
        stop_words_path = _resolve(settings["stop-words"], base_dir)
        try:
            stop_words = load_stop_words(stop_words_path)
        except OSError as e:
            _fail(f"Failed to read stop words {stop_words_path}: {e}")

    bind_context(model_prefix=config.model_prefix, init_method=config.init_method)
    try:
        _cluster(config, texts, stop_words)
    finally:
        clear_context()


def _cluster(config: "KMeansConfig", texts: list[str], stop_words: list[str] | None) -> None:
    import numpy as np

    from kmeans_topics.clustering.errors import KMeansError
    from kmeans_topics.clustering.model import KMeansModel
    from kmeans_topics.clustering.reporting import format_topics
    from kmeans_topics.vectors.provider import TfidfVectorProvider

    logger = get_logger(__name__)

    try:
        provider = TfidfVectorProvider.from_texts(texts, stop_words=stop_words)

        logger.info(
            "Setting up kmeans model",
            num_docs=provider.num_docs,
            num_terms=provider.num_terms,
            topics=config.topics,
        )
        model = KMeansModel(
            provider,
            num_topics=config.topics,
            rng=np.random.default_rng(config.random_seed),
        )
        result = model.run(
            max_iters=config.max_iters,
            init_method=config.init_method,
            output_terms=config.output_terms,
        )
    except (KMeansError, ValueError) as e:
        logger.error("Clustering failed", error=str(e))
        _fail(f"Clustering failed: {e}")

    if result.topics:
        click.echo(format_topics(result.topics))

    paths = model.save(config.model_prefix)

    click.echo("Results:")
    click.echo(f"  Documents:   {model.num_docs}")
    click.echo(f"  Terms:       {model.num_terms}")
    click.echo(f"  Clusters:    {model.num_topics}")
    click.echo(f"  State:       {result.state.value}")
    click.echo(f"  Iterations:  {result.num_iterations}")
    click.echo(f"  Inertia:     {result.inertia:.6f}")
    click.echo(f"  Saved:       {', '.join(str(p) for p in paths)}")


@main.command()
@click.argument("prefix")
def show(prefix: str) -> None:
    """Summarize the model saved under PREFIX.

    Example:
        kmeans-topics show kmeans-model
    """
    from kmeans_topics.clustering.persistence import load_model

    try:
        saved = load_model(prefix)
    except (OSError, ValueError) as e:
        _fail(f"Failed to load model {prefix}: {e}")

    click.echo(f"Model: {prefix}")
    click.echo(f"  Documents:  {saved.num_docs}")
    click.echo(f"  Terms:      {saved.num_terms}")
    click.echo(f"  Clusters:   {saved.num_topics}")
    click.echo("\nCluster sizes:")
    for cluster_id, size in enumerate(saved.cluster_sizes()):
        click.echo(f"  Cluster {cluster_id:<4d} {size:6d} docs")


if __name__ == "__main__":
    main()
