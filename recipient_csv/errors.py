from __future__ import annotations

from typing import Any, Dict, List


class RecipientCsvError(Exception):
    code = "recipient_csv_error"

    def to_detail(self) -> Dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class CsvParseError(RecipientCsvError):
    """Terminal failure: the whole upload is rejected and no records are returned."""


class InsufficientRows(CsvParseError):
    code = "insufficient_rows"

    def __init__(self, found: int):
        self.found = found
        super().__init__(
            "CSV file must contain at least a header row and one data row"
        )

    def to_detail(self) -> Dict[str, Any]:
        return {**super().to_detail(), "found": self.found}


class MissingRequiredColumns(CsvParseError):
    code = "missing_required_columns"

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        cols = ", ".join(f'"{c}"' for c in self.missing)
        super().__init__(f"CSV file is missing required columns: {cols}")

    def to_detail(self) -> Dict[str, Any]:
        return {**super().to_detail(), "missing": self.missing}


class DuplicateCertificationId(CsvParseError):
    code = "duplicate_certification_id"

    def __init__(self, certification_id: str, row: int):
        self.certification_id = certification_id
        self.row = row
        super().__init__(
            f'Duplicate certification_id found: "{certification_id}" on line {row}'
        )

    def to_detail(self) -> Dict[str, Any]:
        return {
            **super().to_detail(),
            "certification_id": self.certification_id,
            "row": self.row,
        }


class NoValidRecipients(CsvParseError):
    code = "no_valid_recipients"

    def __init__(self, skipped: int):
        self.skipped = skipped
        super().__init__("No valid recipient data found in CSV file")

    def to_detail(self) -> Dict[str, Any]:
        return {**super().to_detail(), "skipped": self.skipped}


class UploadError(RecipientCsvError):
    pass


class UndecodableUpload(UploadError):
    code = "undecodable_upload"

    def __init__(self) -> None:
        super().__init__("Uploaded file could not be decoded as text")


class UploadTooLarge(UploadError):
    code = "upload_too_large"

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Uploaded file is {size} bytes; the limit is {limit} bytes")

    def to_detail(self) -> Dict[str, Any]:
        return {**super().to_detail(), "size": self.size, "limit": self.limit}
