"""
Certificate generation boundary.

Rendering itself lives outside this package; render_each only drives a
renderer over parsed recipients so that one bad record never sinks the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from .models import RecipientRecord
from .rules import CERTIFICATE_FILENAME

logger = logging.getLogger(__name__)

Renderer = Callable[[RecipientRecord], bytes]


@dataclass(frozen=True)
class RenderFailure:
    certification_id: str
    error: str


@dataclass
class BatchOutcome:
    artifacts: Dict[str, bytes] = field(default_factory=dict)
    failures: List[RenderFailure] = field(default_factory=list)


def certificate_filename(record: RecipientRecord) -> str:
    return CERTIFICATE_FILENAME.format(certification_id=record.certification_id)


def render_each(records: Iterable[RecipientRecord], render: Renderer) -> BatchOutcome:
    outcome = BatchOutcome()
    for record in records:
        try:
            data = render(record)
        except Exception as exc:
            logger.exception("Error generating certificate for %s", record.name)
            outcome.failures.append(
                RenderFailure(certification_id=record.certification_id, error=str(exc))
            )
            continue
        outcome.artifacts[certificate_filename(record)] = data
    return outcome
