"""Tests for simeval.config."""

import pytest

from simeval.config import STRATEGY_SUITES, BenchmarkConfig, get_suite
from simeval.core import ConfigurationError
from simeval.strategies import create_strategies


class TestBenchmarkConfig:
    def test_defaults_are_valid(self):
        config = BenchmarkConfig()
        config.validate()
        assert config.sizes[0] == 200
        assert config.min_score == 0.83
        assert config.similarity == "cosine"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"sizes": []},
            {"sizes": [100, 1]},
            {"min_score": 1.5},
            {"similarity": "euclidean"},
            {"suite": "missing"},
            {"n_workers": 0},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            BenchmarkConfig(**overrides).validate()

    def test_explicit_strategies_override_suite(self):
        specs = {"g": {"kind": "gradient", "params": {"decay": 0.5}}}
        config = BenchmarkConfig(suite="missing", strategies=specs)
        config.validate()
        assert config.resolve_strategies() == specs

    def test_suite_used_by_default(self):
        assert BenchmarkConfig(suite="quick").resolve_strategies() == get_suite("quick")


class TestSuites:
    @pytest.mark.parametrize("name", sorted(STRATEGY_SUITES))
    def test_every_suite_builds(self, name):
        strategies = create_strategies(get_suite(name), seed=1)
        assert set(strategies) == set(STRATEGY_SUITES[name])

    def test_default_suite_size(self):
        assert len(get_suite("default")) == 15

    def test_get_suite_returns_copy(self):
        suite = get_suite("default")
        suite["gradient"]["params"]["decay"] = 0.1
        assert STRATEGY_SUITES["default"]["gradient"]["params"]["decay"] == 0.99

    def test_unknown_suite(self):
        with pytest.raises(KeyError):
            get_suite("missing")
