import argparse
import logging

from csvclean.config import get_settings
from csvclean.pipeline import CleaningRunner


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a measurements CSV and write the clean rows")
    subparsers = parser.add_subparsers(dest="command", required=True)

    clean_parser = subparsers.add_parser("clean", help="drop malformed rows and write the normalized CSV")
    clean_parser.add_argument("--input", help="source CSV path (default: INPUT_PATH)")
    clean_parser.add_argument("--output", help="destination CSV path (default: OUTPUT_PATH)")

    validate_parser = subparsers.add_parser("validate", help="report malformed rows without writing output")
    validate_parser.add_argument("--input", help="source CSV path (default: INPUT_PATH)")

    for sub in (clean_parser, validate_parser):
        sub.add_argument("--rejects", help="write dropped rows as JSON lines to this path")
        sub.add_argument("--report", help="write a JSON run report to this path")
        sub.add_argument("--summary", action="store_true", help="print a one-line run summary")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    runner = CleaningRunner(settings)
    result = runner.run(
        input_path=args.input,
        output_path=getattr(args, "output", None),
        rejects_path=args.rejects,
        report_path=args.report,
        write_output=args.command == "clean",
    )

    if args.summary:
        print(
            "command={command} status={status} total={total} valid={valid} invalid={invalid} output={output} report={report}".format(
                command=args.command,
                status=result.status,
                total=result.total_rows,
                valid=result.valid_rows,
                invalid=result.invalid_rows,
                output=result.output_path,
                report=result.report_path,
            )
        )
    if result.status == "failed":
        raise SystemExit(1)


if __name__ == "__main__":
    main()
