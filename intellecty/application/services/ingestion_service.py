"""Validation of uploaded product, sales and inventory files.

CSV files are parsed and checked row by row. Excel files are accepted and
recorded but not parsed. Results are cached per tenant under a digest of
the file content, so re-uploading the same file returns the same data source.
"""

from __future__ import annotations

import csv
import hashlib
import io
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from intellecty.domain.exceptions import ValidationException
from intellecty.infrastructure.cache import CacheProtocol, upload_key
from intellecty.infrastructure.exceptions import CacheException
from intellecty.schemas.ingestion import RowError, UploadResult, ValidationResults

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv"
EXCEL_CONTENT_TYPES = frozenset(
    {
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)
ALLOWED_CONTENT_TYPES = EXCEL_CONTENT_TYPES | {CSV_CONTENT_TYPE}

REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "products": ("sku", "name", "category", "price"),
    "sales": ("sku", "date", "quantity"),
    "inventory": ("sku", "quantity", "location"),
}
NUMERIC_COLUMNS = frozenset({"price", "quantity", "cost"})

# Source header -> canonical field
COLUMN_ALIASES = {
    "product_id": "sku",
    "sku": "sku",
    "product_name": "name",
    "name": "name",
    "category": "category",
    "unit_price": "price",
    "price": "price",
    "cost": "cost",
    "qty": "quantity",
    "quantity": "quantity",
    "date": "date",
    "sale_date": "date",
    "location": "location",
    "warehouse": "location",
}

MAX_REPORTED_ERRORS = 50


def map_columns(headers: list[str]) -> dict[str, str]:
    """Map canonical field names to the source headers that provide them."""
    mapping: dict[str, str] = {}
    for header in headers:
        canonical = COLUMN_ALIASES.get(header.strip().lower())
        if canonical and canonical not in mapping:
            mapping[canonical] = header
    return mapping


def validate_csv(text: str, data_type: str) -> tuple[ValidationResults, dict[str, str]]:
    """Check every row of a CSV document against the columns data_type requires."""
    reader = csv.DictReader(io.StringIO(text))
    mapping = map_columns(reader.fieldnames or [])
    required = REQUIRED_COLUMNS[data_type]
    missing = [c for c in required if c not in mapping]

    warnings: list[str] = []
    errors: list[RowError] = []
    if missing:
        warnings.append(f"Missing required columns: {', '.join(missing)}")

    total = valid = 0
    truncated = False
    for row_number, row in enumerate(reader, start=2):
        total += 1
        problems = []
        for field in required:
            if field in missing:
                continue
            value = (row.get(mapping[field]) or "").strip()
            if not value:
                problems.append(f"'{field}' is empty")
            elif field in NUMERIC_COLUMNS:
                try:
                    float(value)
                except ValueError:
                    problems.append(f"'{field}' is not a number: {value!r}")
        if problems or missing:
            if problems:
                if len(errors) < MAX_REPORTED_ERRORS:
                    errors.append(RowError(row=row_number, message="; ".join(problems)))
                else:
                    truncated = True
            continue
        valid += 1

    if total == 0:
        warnings.append("File contains no data rows")
    elif truncated:
        warnings.append(f"Only the first {MAX_REPORTED_ERRORS} row errors are reported")
    return ValidationResults(total_rows=total, valid_rows=valid, errors=errors, warnings=warnings), mapping


def _cached_upload(key: str, value: Any) -> UploadResult | None:
    if value is None:
        return None
    try:
        return UploadResult.model_validate(value)
    except ValidationError as e:
        logger.warning("Discarding cached upload %s (%s validation errors)", key, e.error_count())
        return None


class IngestionService:
    """Validates uploads and remembers them per tenant."""

    def __init__(self, cache: CacheProtocol, ttl: int, max_upload_size: int) -> None:
        self.cache = cache
        self.ttl = ttl
        self.max_upload_size = max_upload_size

    async def process_upload(
        self,
        tenant_id: str,
        filename: str,
        content_type: str | None,
        content: bytes,
        data_type: str | None,
    ) -> UploadResult:
        """Validate an uploaded file and return its data source summary.

        Raises:
            ValidationException: unsupported file type or data type, empty,
                oversized or undecodable file.
        """
        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationException(
                "Invalid file type. Please upload CSV or Excel files.", field="file"
            )
        data_type = (data_type or "products").strip().lower()
        if data_type not in REQUIRED_COLUMNS:
            raise ValidationException(
                f"Invalid dataType '{data_type}'. Expected one of: "
                + ", ".join(REQUIRED_COLUMNS),
                field="dataType",
            )
        if not content:
            raise ValidationException("Uploaded file is empty", field="file")
        if len(content) > self.max_upload_size:
            raise ValidationException(
                f"File exceeds the {self.max_upload_size} byte upload limit", field="file"
            )

        digest = hashlib.sha256(content).hexdigest()
        key = upload_key(tenant_id, {"sha256": digest, "dataType": data_type})
        if await self.cache.exists(key):
            previous = _cached_upload(key, await self.cache.get(key))
            if previous is not None:
                logger.info("Duplicate upload for tenant %s: %s", tenant_id, filename)
                return previous.model_copy(update={"duplicate": True})

        if content_type == CSV_CONTENT_TYPE:
            try:
                text = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ValidationException("CSV file must be UTF-8 encoded", field="file") from e
            results, mapping = validate_csv(text, data_type)
        else:
            results = ValidationResults(
                total_rows=0,
                valid_rows=0,
                warnings=["Excel files are stored without row validation; upload CSV to validate rows"],
            )
            mapping = {}

        result = UploadResult(
            data_source_id=f"source-{digest[:12]}",
            data_type=data_type,
            filename=filename,
            content_type=content_type,
            total_records=results.total_rows,
            processed_records=results.valid_rows,
            validation_results=results,
            schema_mapping=mapping,
            uploaded_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Processed upload %s for tenant %s: %s/%s valid rows",
            filename,
            tenant_id,
            results.valid_rows,
            results.total_rows,
        )
        if self.cache.is_available():
            try:
                await self.cache.set(key, result.to_cache(), self.ttl)
            except CacheException as e:
                logger.warning("Upload result not cached: %s", e.message)
        return result
