from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, constr

NonBlankStr = constr(strip_whitespace=True, min_length=1)


class RecipientRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: NonBlankStr
    certification_id: NonBlankStr
    email: Optional[str] = None


class SkippedRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    issue: str
    detail: str


class ParseResult(BaseModel):
    recipients: List[RecipientRecord] = Field(default_factory=list)
    skipped: List[SkippedRow] = Field(default_factory=list)


class ParseSummary(BaseModel):
    recipients: int = 0
    skipped: int = 0


class ParseResponse(BaseModel):
    recipients: List[RecipientRecord]
    skipped: List[SkippedRow] = Field(default_factory=list)
    summary: ParseSummary


class ExportRequest(BaseModel):
    event_title: str = Field(default="recipients", examples=["Spring Workshop 2025"])
    recipients: List[RecipientRecord]


class HealthResponse(BaseModel):
    ok: bool = True
