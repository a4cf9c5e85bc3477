"""Tests for simeval.data.loader."""

import json

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from simeval.core import ConfigurationError, NumericDegeneracyError
from simeval.data import generate_dirichlet_corpus, load_corpus

DOCUMENTS = [
    {"id": "a", "vector": [0.5, 0.5]},
    {"id": "b", "vector": [0.2, 0.8]},
    {"id": "c", "vector": [0.9, 0.1]},
]


class TestLoadCorpus:
    def test_json_with_documents_key(self, tmp_path):
        path = tmp_path / "corpora.json"
        path.write_text(json.dumps({"documents": DOCUMENTS}))
        corpus = load_corpus(path)
        assert corpus.ids == ("a", "b", "c")
        assert corpus.n_topics == 2

    def test_json_bare_list_with_limit(self, tmp_path):
        path = tmp_path / "docs.json"
        path.write_text(json.dumps(DOCUMENTS))
        corpus = load_corpus(str(path), limit=2)
        assert corpus.ids == ("a", "b")

    def test_parquet(self, tmp_path):
        path = tmp_path / "docs.parquet"
        table = pa.table({
            "id": [d["id"] for d in DOCUMENTS],
            "vector": [d["vector"] for d in DOCUMENTS],
        })
        pq.write_table(table, path)
        corpus = load_corpus(path)
        assert corpus.ids == ("a", "b", "c")
        np.testing.assert_allclose(corpus.matrix[1], [0.2, 0.8])

    def test_parquet_missing_column(self, tmp_path):
        path = tmp_path / "docs.parquet"
        pq.write_table(pa.table({"id": ["a"]}), path)
        with pytest.raises(ConfigurationError, match="missing columns"):
            load_corpus(path)

    def test_missing_keys(self, tmp_path):
        path = tmp_path / "docs.json"
        path.write_text(json.dumps([{"id": "a"}]))
        with pytest.raises(ConfigurationError, match="missing keys"):
            load_corpus(path)

    def test_degenerate_vector(self, tmp_path):
        path = tmp_path / "docs.json"
        path.write_text(json.dumps([{"id": "a", "vector": [0.5, 0.2]}]))
        with pytest.raises(NumericDegeneracyError):
            load_corpus(path)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "docs.csv"
        path.write_text("id,vector\n")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_corpus(path)


class TestGenerateDirichletCorpus:
    def test_shape(self):
        corpus = generate_dirichlet_corpus(size=30, n_topics=8, seed=1)
        assert len(corpus) == 30
        assert corpus.n_topics == 8
        np.testing.assert_allclose(corpus.matrix.sum(axis=1), 1.0)

    def test_seeded(self):
        first = generate_dirichlet_corpus(size=20, n_topics=5, seed=3)
        again = generate_dirichlet_corpus(size=20, n_topics=5, seed=3)
        other = generate_dirichlet_corpus(size=20, n_topics=5, seed=4)
        np.testing.assert_array_equal(first.matrix, again.matrix)
        assert not np.array_equal(first.matrix, other.matrix)

    def test_invalid_shape(self):
        with pytest.raises(ConfigurationError):
            generate_dirichlet_corpus(size=10, n_topics=0)
