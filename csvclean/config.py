from dataclasses import dataclass
import os

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str
    input_path: str
    output_path: str
    rejects_path: str | None
    report_path: str | None
    decimal_places: int


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "csvclean"),
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
        input_path=os.getenv("INPUT_PATH", "data/iris_multiple_mixed_types.csv"),
        output_path=os.getenv("OUTPUT_PATH", "processed.csv"),
        rejects_path=os.getenv("REJECTS_PATH") or None,
        report_path=os.getenv("REPORT_PATH") or None,
        decimal_places=int(os.getenv("DECIMAL_PLACES", "2")),
    )
