"""Corpus loading and synthesis.

- load_corpus(): read a corpus from JSON (the `corpora.json` layout) or Parquet
- generate_dirichlet_corpus(): synthetic topic proportions with planted themes
"""

import json
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pyarrow.parquet as pq

from simeval.core.errors import ConfigurationError
from simeval.core.types import Corpus, Distribution

# Required columns / keys for each document
REQUIRED_COLUMNS = {"id", "vector"}


def _corpus_from_records(records, limit: Optional[int]) -> Corpus:
    if limit is not None:
        records = records[:limit]
    for record in records:
        missing = REQUIRED_COLUMNS - set(record)
        if missing:
            raise ConfigurationError(f"Document record missing keys: {sorted(missing)}")
    return Corpus(Distribution(record["id"], record["vector"]) for record in records)


def load_corpus(path: Union[str, Path], limit: Optional[int] = None) -> Corpus:
    """Load a corpus of topic distributions.

    JSON files may hold {"documents": [{"id": ..., "vector": [...]}, ...]} or a
    bare list of such documents. Parquet files need `id` and `vector` columns.

    Args:
        path: .json or .parquet file.
        limit: Keep only the first `limit` documents.

    Returns:
        Corpus in file order.

    Raises:
        ConfigurationError: On unsupported extension or missing fields.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with open(path) as f:
            payload = json.load(f)
        documents = payload["documents"] if isinstance(payload, dict) else payload
        return _corpus_from_records(list(documents), limit)

    if suffix == ".parquet":
        table = pq.read_table(path)
        missing = REQUIRED_COLUMNS - set(table.column_names)
        if missing:
            raise ConfigurationError(f"Parquet file {path} missing columns: {sorted(missing)}")
        frame = table.select(["id", "vector"]).to_pandas()
        return _corpus_from_records(frame.to_dict("records"), limit)

    raise ConfigurationError(f"Unsupported corpus format '{suffix}' for {path}")


def generate_dirichlet_corpus(
    size: int,
    n_topics: int,
    n_themes: int = 10,
    concentration: float = 50.0,
    theme_alpha: float = 0.1,
    seed: int = 42,
) -> Corpus:
    """Sample a synthetic corpus of topic proportions.

    Each theme is a sparse Dirichlet(theme_alpha) prototype; each document is
    drawn from Dirichlet(concentration * prototype + 1e-3) around a randomly
    chosen theme, so documents of the same theme tend to be similar.

    Args:
        size: Number of documents.
        n_topics: Vector length.
        n_themes: Number of planted themes.
        concentration: Higher values keep documents closer to their theme.
        theme_alpha: Sparsity of the theme prototypes.
        seed: Random seed.

    Returns:
        Corpus with positional ids.
    """
    if size < 0 or n_topics < 1 or n_themes < 1:
        raise ConfigurationError(
            f"Invalid corpus shape: size={size}, n_topics={n_topics}, n_themes={n_themes}"
        )
    rng = np.random.default_rng(seed)
    themes = rng.dirichlet(np.full(n_topics, theme_alpha), size=n_themes)
    assignments = rng.integers(0, n_themes, size=size)

    vectors = np.empty((size, n_topics), dtype=np.float64)
    for idx, theme in enumerate(assignments):
        vectors[idx] = rng.dirichlet(concentration * themes[theme] + 1e-3)

    return Corpus.from_vectors(vectors)
