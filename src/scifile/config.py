"""Reader and writer settings for the file helpers."""

from __future__ import annotations

from dataclasses import dataclass, replace
import codecs
import os


@dataclass(frozen=True)
class IOConfig:
    """Container for user-controlled CSV/JSON parsing and output parameters."""

    csv_delimiter: str = ","
    csv_comment: str = "#"
    csv_has_headers: bool = True
    json_indent: int = 2
    run_prefix: str = "run_"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if len(self.csv_delimiter) != 1:
            raise ValueError("csv_delimiter must be a single character")
        if self.csv_delimiter in {"\n", "\r", '"'}:
            raise ValueError("csv_delimiter cannot be a newline or quote character")
        if len(self.csv_comment) != 1:
            raise ValueError("csv_comment must be a single character")
        if self.csv_comment == self.csv_delimiter:
            raise ValueError("csv_comment and csv_delimiter must differ")
        if self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")
        if self.run_prefix.strip() == "":
            raise ValueError("run_prefix cannot be empty")
        if os.sep in self.run_prefix or (os.altsep and os.altsep in self.run_prefix):
            raise ValueError("run_prefix cannot contain a path separator")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {self.encoding}") from exc

    @classmethod
    def from_env(cls) -> "IOConfig":
        """Defaults overridden by ``SCIFILE_*`` environment variables."""
        overrides = {}
        delimiter = os.getenv("SCIFILE_CSV_DELIMITER")
        if delimiter:
            overrides["csv_delimiter"] = delimiter
        indent = os.getenv("SCIFILE_JSON_INDENT")
        if indent:
            try:
                overrides["json_indent"] = int(indent)
            except ValueError as exc:
                raise ValueError("SCIFILE_JSON_INDENT must be an integer") from exc
        prefix = os.getenv("SCIFILE_RUN_PREFIX")
        if prefix:
            overrides["run_prefix"] = prefix
        return replace(cls(), **overrides)


DEFAULT_CONFIG = IOConfig()
