from dataclasses import dataclass, field


@dataclass(frozen=True)
class Record:
    sepal_length: float
    sepal_width: float
    petal_length: float
    petal_width: float
    species: str


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    kind: str


@dataclass(frozen=True)
class RowFailure:
    line: int
    column: int
    reason: str
    row: list[str]


@dataclass(frozen=True)
class LoadResult:
    records: list[Record] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.records) + len(self.failures)


@dataclass(frozen=True)
class CleanResult:
    status: str
    input_path: str
    output_path: str | None
    total_rows: int
    valid_rows: int
    invalid_rows: int
    report_path: str | None
    error: str | None = None
