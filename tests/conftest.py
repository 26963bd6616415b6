from pathlib import Path

import pytest

from csvclean.config import Settings
from csvclean.pipeline import CleaningRunner


MIXED_ROWS = (
    "5.1,3.5,1.4,0.2,setosa\n"
    "5.1,hello,1.4,0.2,setosa\n"
    "4.9,3.0,1.4,0.2,setosa\n"
    "5.1,3.5,1.4,0.2,\n"
    "7,3.2,4.7,1.4,versicolor\n"
)


@pytest.fixture()
def temp_workspace(tmp_path: Path) -> Path:
    (tmp_path / "data").mkdir(parents=True, exist_ok=True)
    (tmp_path / "outputs").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture()
def input_file(temp_workspace: Path) -> Path:
    path = temp_workspace / "data" / "iris_multiple_mixed_types.csv"
    path.write_text(MIXED_ROWS, encoding="utf-8")
    return path


@pytest.fixture()
def test_settings(temp_workspace: Path) -> Settings:
    return Settings(
        app_name="csvclean",
        log_level="WARNING",
        input_path=str(temp_workspace / "data" / "iris_multiple_mixed_types.csv"),
        output_path=str(temp_workspace / "outputs" / "processed.csv"),
        rejects_path=None,
        report_path=None,
        decimal_places=2,
    )


@pytest.fixture()
def runner(test_settings: Settings) -> CleaningRunner:
    return CleaningRunner(test_settings)
