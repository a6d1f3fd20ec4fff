"""
CSV Record Reader
Streams delimited files as raw column -> value records.
"""

import itertools
import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

import chardet
import pandas as pd

from catalog_import.errors import CsvSourceError

logger = logging.getLogger(__name__)


def detect_csv_encoding(file_path: Union[str, Path]) -> str:
    """
    Detect CSV file encoding using chardet.

    Args:
        file_path: Path to CSV file

    Returns:
        Detected encoding string
    """
    with open(file_path, "rb") as f:
        raw_data = f.read(10000)  # Read first 10KB

    result = chardet.detect(raw_data)
    encoding = result["encoding"]
    confidence = result["confidence"] or 0.0

    # ASCII is often a false positive for UTF-8 files
    if encoding and encoding.lower() == "ascii":
        logger.info("Detected ASCII, using UTF-8 (ASCII superset)")
        return "utf-8"

    if encoding:
        logger.info(f"Detected encoding: {encoding} (confidence: {confidence:.2%})")
        return encoding

    return "utf-8"  # Default fallback


@dataclass
class RawRecord:
    """
    One source record as read from the file.

    Values are looked up by exact column name; absent and empty values
    are both reported as None.
    """

    row_number: int
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def columns(self) -> List[str]:
        return list(self.data.keys())

    def value(self, column_name: Optional[str]) -> Optional[str]:
        """Trimmed value of a column, or None if absent or empty."""
        if not column_name:
            return None

        raw = self.data.get(column_name)
        if raw is None:
            return None
        if pd.api.types.is_scalar(raw) and pd.isna(raw):
            return None

        text = str(raw).strip()
        return text or None


class CsvRecordReader:
    """
    Reads a CSV file in chunks and yields one RawRecord per row.
    Every value is kept as text; type coercion belongs to the mapper.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        delimiter: str = ",",
        encoding: Optional[str] = None,
        chunk_size: int = 1000,
    ):
        """
        Initialize the reader.

        Args:
            file_path: Path to CSV file
            delimiter: Field separator
            encoding: File encoding; detected with chardet when None
            chunk_size: Number of rows read at once
        """
        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.chunk_size = chunk_size
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        if self._encoding is None:
            self._check_exists()
            self._encoding = detect_csv_encoding(self.file_path)
        return self._encoding

    def _check_exists(self) -> None:
        if not self.file_path.exists():
            raise CsvSourceError(str(self.file_path), "file not found")

    def _read_csv(self, **kwargs):
        return pd.read_csv(
            self.file_path,
            sep=self.delimiter,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            index_col=False,  # Never take a column as row index
            encoding=self.encoding,
            **kwargs,
        )

    def _parse(self, step: Callable[[], Any]) -> Any:
        """
        Run one pandas parsing step.

        Rows with more fields than the header make pandas warn and drop
        data, so parser warnings are raised as errors here.

        Raises:
            CsvSourceError: On any parser fault, with the original as cause.
        """
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("error", pd.errors.ParserWarning)
                return step()
        except (
            pd.errors.ParserError,
            pd.errors.ParserWarning,
            pd.errors.EmptyDataError,
            UnicodeDecodeError,
        ) as e:
            raise CsvSourceError(str(self.file_path), str(e)) from e

    def columns(self) -> List[str]:
        """Return the header of the file."""
        self._check_exists()
        header = self._parse(lambda: self._read_csv(nrows=0))
        return [str(column).strip() for column in header.columns]

    def __iter__(self) -> Iterator[RawRecord]:
        return self.read()

    def read(self) -> Iterator[RawRecord]:
        """Yield records in file order, one chunk at a time."""
        self._check_exists()
        row_number = 0

        chunk_iterator = self._parse(lambda: self._read_csv(chunksize=self.chunk_size))
        with chunk_iterator:
            for chunk_num in itertools.count():
                chunk_df = self._parse(lambda: next(chunk_iterator, None))
                if chunk_df is None:
                    break

                chunk_df.columns = [str(column).strip() for column in chunk_df.columns]
                logger.debug(
                    f"Read chunk {chunk_num + 1} "
                    f"(rows {row_number + 1}-{row_number + len(chunk_df)})"
                )

                for record in chunk_df.to_dict("records"):
                    row_number += 1
                    yield RawRecord(row_number=row_number, data=record)
