from collections.abc import Callable
import json
import logging
from pathlib import Path
from typing import TypeVar

from csvclean.config import Settings
from csvclean.schemas import CleanResult, LoadResult, RowFailure
from csvclean.step_logic import load_records, write_records


logger = logging.getLogger(__name__)
T = TypeVar("T")


class CleaningRunner:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def run(
        self,
        *,
        input_path: str | None = None,
        output_path: str | None = None,
        rejects_path: str | None = None,
        report_path: str | None = None,
        write_output: bool = True,
    ) -> CleanResult:
        source = Path(input_path or self.settings.input_path)
        destination = Path(output_path or self.settings.output_path) if write_output else None
        rejects = rejects_path or self.settings.rejects_path
        report = report_path or self.settings.report_path

        loaded = LoadResult()
        try:
            loaded = self._run_step("load", lambda: load_records(source))
            if destination is not None:
                self._run_step(
                    "write",
                    lambda: write_records(destination, loaded.records, self.settings.decimal_places),
                )
            if rejects or report:
                self._run_step(
                    "publish_report",
                    lambda: self._publish_outputs(
                        source=source,
                        destination=destination,
                        loaded=loaded,
                        rejects_path=Path(rejects) if rejects else None,
                        report_path=Path(report) if report else None,
                    ),
                )
        except Exception as exc:
            logger.exception("cleaning run failed", extra={"input_path": str(source)})
            return self._result(
                "failed", source, destination, loaded, report_path=report, error=str(exc)
            )

        return self._result("succeeded", source, destination, loaded, report_path=report)

    def _run_step(self, step_name: str, fn: Callable[[], T]) -> T:
        logger.debug("step started", extra={"step": step_name})
        result = fn()
        logger.debug("step finished", extra={"step": step_name})
        return result

    def _publish_outputs(
        self,
        *,
        source: Path,
        destination: Path | None,
        loaded: LoadResult,
        rejects_path: Path | None,
        report_path: Path | None,
    ) -> None:
        if rejects_path is not None:
            rejects_path.parent.mkdir(parents=True, exist_ok=True)
            with rejects_path.open("w", encoding="utf-8") as rejects_file:
                for failure in loaded.failures:
                    rejects_file.write(json.dumps(self._failure_payload(failure), sort_keys=True) + "\n")

        if report_path is not None:
            report = {
                "app_name": self.settings.app_name,
                "input_path": str(source),
                "output_path": str(destination) if destination else None,
                "rejects_path": str(rejects_path) if rejects_path else None,
                "total_rows": loaded.total_rows,
                "valid_rows": len(loaded.records),
                "invalid_rows": len(loaded.failures),
            }
            report_path.parent.mkdir(parents=True, exist_ok=True)
            report_path.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")

    @staticmethod
    def _failure_payload(failure: RowFailure) -> dict[str, object]:
        return {
            "line": failure.line,
            "column": failure.column,
            "reason": failure.reason,
            "row": failure.row,
        }

    @staticmethod
    def _result(
        status: str,
        source: Path,
        destination: Path | None,
        loaded: LoadResult,
        *,
        report_path: str | None,
        error: str | None = None,
    ) -> CleanResult:
        return CleanResult(
            status=status,
            input_path=str(source),
            output_path=str(destination) if destination else None,
            total_rows=loaded.total_rows,
            valid_rows=len(loaded.records),
            invalid_rows=len(loaded.failures),
            report_path=report_path,
            error=error,
        )
