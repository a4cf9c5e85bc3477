"""Shared fixtures: the four-document scenario and a synthetic corpus."""

import pytest

from simeval.core import Corpus, build_gold_standard
from simeval.data import generate_dirichlet_corpus


@pytest.fixture()
def scenario_corpus():
    """d1/d2 lean on topic 0, d3/d4 on topic 1."""
    return Corpus.from_vectors(
        [[0.9, 0.1], [0.85, 0.15], [0.1, 0.9], [0.2, 0.8]],
        ids=["d1", "d2", "d3", "d4"],
    )


@pytest.fixture()
def scenario_gold(scenario_corpus):
    return build_gold_standard(scenario_corpus, 0.95, similarity="cosine")


@pytest.fixture(scope="session")
def synthetic_corpus():
    return generate_dirichlet_corpus(size=80, n_topics=12, n_themes=5, seed=7)


@pytest.fixture(scope="session")
def synthetic_gold(synthetic_corpus):
    return build_gold_standard(synthetic_corpus, 0.8, similarity="cosine")
