"""
app/services/csv_batch_service.py

Batch coordinator for expense CSV uploads.

The whole file is read and framed before any row is processed; framing
problems abort the upload. Data rows then run one at a time, in file order,
through the same ingestion pipeline as manual entries. Each successful row
is committed immediately, so later rows in the batch see earlier ones when
their category average is computed. A failed row is recorded and skipped;
it never aborts the batch.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import BinaryIO

from app.config import get_csv_upload_settings
from app.domain.expense import BatchOutcome
from app.repositories.errors import ExpensePersistenceError, ExpenseStoreUnavailableError
from app.services.expense_ingestion_service import ExpenseIngestionService
from app.validators.expense_row_validator import ExpenseRowParser, RowParseError

logger = logging.getLogger(__name__)

_UNEXPECTED_ROW_ERROR = "Unexpected error while saving expense."


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVFormatError(ValueError):
    """
    Raised when the upload is empty or cannot be framed as CSV rows.
    """


class CSVUploadTooLargeError(CSVFormatError):
    """
    Raised when the upload exceeds the configured size limit.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CSVBatchService:
    """
    Reads CSV uploads and drives the ingestion pipeline row by row.
    """

    def __init__(
        self,
        *,
        max_upload_bytes: int,
        log_row_errors: bool = True,
        parser: ExpenseRowParser | None = None,
    ) -> None:
        self._max_upload_bytes = max(1, max_upload_bytes)
        self._log_row_errors = log_row_errors
        self._parser = parser or ExpenseRowParser()

    def ingest_csv(
        self,
        *,
        content: bytes,
        ingestion_service: ExpenseIngestionService,
    ) -> BatchOutcome:
        """
        Frame an uploaded file and run every data row through ingestion.
        """
        rows = self.read_rows(content)
        return self.run_batch(rows=rows, ingestion_service=ingestion_service)

    def read_upload(self, stream: BinaryIO) -> bytes:
        """
        Read at most one byte past the size limit from an upload stream.

        The extra byte lets read_rows reject an oversized file without the
        rest of it ever being buffered.
        """
        return stream.read(self._max_upload_bytes + 1)

    def read_rows(self, content: bytes) -> list[list[str]]:
        """
        Decode and frame the whole upload.

        Raises CSVFormatError for empty, oversized, non-UTF-8 or malformed
        input.
        """
        if not content:
            raise CSVFormatError("Uploaded CSV file is empty.")
        if len(content) > self._max_upload_bytes:
            raise CSVUploadTooLargeError(
                "Uploaded file exceeds the maximum allowed size of "
                f"{_format_size(self._max_upload_bytes)}."
            )

        try:
            text = content.decode("utf-8-sig")
            rows = list(csv.reader(io.StringIO(text, newline=""), strict=True))
        except UnicodeDecodeError as exc:
            raise CSVFormatError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise CSVFormatError(f"Failed to parse CSV file: {exc}") from exc

        if not rows:
            raise CSVFormatError("Uploaded CSV file is empty.")
        return rows

    def run_batch(
        self,
        *,
        rows: Sequence[Sequence[str]],
        ingestion_service: ExpenseIngestionService,
    ) -> BatchOutcome:
        """
        Process framed rows strictly in order and aggregate the outcome.

        Row numbers in error messages are 1-based file positions, so the
        first data row after a header is row 2. ExpenseStoreUnavailableError
        propagates and aborts the batch.
        """
        start_index = 1 if self._parser.is_header_row(rows) else 0
        outcome = BatchOutcome(total_rows=len(rows) - start_index)

        for index in range(start_index, len(rows)):
            row_number = index + 1
            try:
                candidate = self._parser.parse_row(rows[index], row_number)
                record = ingestion_service.ingest(candidate)
            except RowParseError as exc:
                self._record_failure(outcome, row_number, exc.reason)
                continue
            except ExpenseStoreUnavailableError:
                raise
            except ExpensePersistenceError as exc:
                self._record_failure(outcome, row_number, str(exc))
                continue
            except Exception:  # noqa: BLE001
                logger.exception("Unexpected failure while ingesting CSV row %s", row_number)
                self._record_failure(outcome, row_number, _UNEXPECTED_ROW_ERROR)
                continue

            outcome.record_success(record)

        logger.info(
            "CSV processing complete total=%s success=%s failure=%s",
            outcome.total_rows,
            outcome.success_count,
            outcome.failure_count,
        )
        return outcome

    def _record_failure(self, outcome: BatchOutcome, row_number: int, reason: str) -> None:
        if self._log_row_errors:
            logger.warning("Failed to process CSV row %s: %s", row_number, reason)
        outcome.record_failure(row_number, reason)


def _format_size(size_bytes: int) -> str:
    mebibyte = 1024 * 1024
    if size_bytes % mebibyte == 0:
        return f"{size_bytes // mebibyte}MB"
    return f"{size_bytes} bytes"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_batch_service() -> CSVBatchService:
    """
    Build and cache the batch service with env-driven settings.
    """
    settings = get_csv_upload_settings()
    return CSVBatchService(
        max_upload_bytes=settings.max_upload_bytes,
        log_row_errors=settings.log_row_errors,
    )
