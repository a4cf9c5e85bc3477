"""In-memory collection of benchmark metrics records.

Results are usually read as one table per metric, corpus sizes as rows and
strategies as columns. BenchmarkResults builds those views as pandas
DataFrames and leaves rendering and file output to the caller.
"""

from typing import Dict, Iterable, Iterator, List

import pandas as pd

from simeval.core.types import MetricsRecord

# Metrics that make sense as a sizes x strategies table
METRIC_COLUMNS = (
    "elapsed",
    "efficiency",
    "f_measure",
    "precision",
    "recall",
    "comparisons",
    "clusters",
    "effectiveness",
)


class BenchmarkResults:
    """Ordered collection of MetricsRecord plus per-size failures.

    Attributes:
        records: Records in the order they were produced.
        failures: Mapping of corpus size -> error message for aborted sizes.
    """

    def __init__(self, records: Iterable[MetricsRecord] = ()):
        self.records: List[MetricsRecord] = list(records)
        self.failures: Dict[int, str] = {}

    def __repr__(self) -> str:
        return (
            f"BenchmarkResults(records={len(self.records)}, "
            f"strategies={len(self.strategies)}, sizes={self.sizes}, "
            f"failures={len(self.failures)})"
        )

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[MetricsRecord]:
        return iter(self.records)

    def append(self, record: MetricsRecord) -> None:
        self.records.append(record)

    def extend(self, records: Iterable[MetricsRecord]) -> None:
        self.records.extend(records)

    def record_failure(self, size: int, message: str) -> None:
        self.failures[size] = message

    @property
    def strategies(self) -> List[str]:
        return sorted({r.strategy for r in self.records})

    @property
    def sizes(self) -> List[int]:
        return sorted({r.corpus_size for r in self.records})

    def for_strategy(self, name: str) -> List[MetricsRecord]:
        return [r for r in self.records if r.strategy == name]

    def for_size(self, size: int) -> List[MetricsRecord]:
        return [r for r in self.records if r.corpus_size == size]

    def to_frame(self) -> pd.DataFrame:
        """One row per record, columns as in MetricsRecord."""
        if not self.records:
            return pd.DataFrame(columns=list(MetricsRecord.__dataclass_fields__))
        return pd.DataFrame([r.to_dict() for r in self.records])

    def pivot(self, metric: str) -> pd.DataFrame:
        """Sizes x strategies table for one metric.

        Raises:
            KeyError: If metric is not one of METRIC_COLUMNS.
        """
        if metric not in METRIC_COLUMNS:
            raise KeyError(f"Unknown metric '{metric}'. Available: {list(METRIC_COLUMNS)}")
        return self.to_frame().pivot_table(
            index="corpus_size", columns="strategy", values=metric, aggfunc="first"
        )

    def summary(self) -> pd.DataFrame:
        """Per-strategy mean of every metric, best effectiveness first."""
        frame = self.to_frame()
        if frame.empty:
            return pd.DataFrame(columns=list(METRIC_COLUMNS))
        summary = frame.groupby("strategy")[list(METRIC_COLUMNS)].mean()
        return summary.sort_values("effectiveness", ascending=False)

    def best_strategy(self, metric: str = "effectiveness") -> str:
        """Strategy with the highest mean value of `metric`."""
        if not self.records:
            raise ValueError("No records to rank")
        if metric not in METRIC_COLUMNS:
            raise KeyError(f"Unknown metric '{metric}'. Available: {list(METRIC_COLUMNS)}")
        means = self.to_frame().groupby("strategy")[metric].mean()
        return str(means.idxmax())
