"""
Print Job Model
===============

History entry for one synchronous print call. Jobs are written once the
transport returns; nothing is queued or retried.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from ..result import PrintingResult

TIMESTAMP_FIELDS = ('created_at', 'started_at', 'completed_at')


def _job_id() -> str:
    return f"JOB-{uuid.uuid4().hex[:8].upper()}"


@dataclass
class PrintJob:
    """Which printer was asked to print what, and how it went."""

    id: str = field(default_factory=_job_id)
    printer_id: str = ""
    job_type: str = "print"  # print, test
    document_name: str = ""
    media_type: int = 0
    source_ip: Optional[str] = None

    status: str = "pending"  # pending, printing, completed, failed
    error_message: Optional[str] = None
    result: Dict[str, Any] = field(default_factory=dict)

    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Seconds between start and completion, once both are known."""
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in TIMESTAMP_FIELDS:
            if data[key] is not None:
                data[key] = data[key].isoformat()
        data['duration'] = self.duration
        return data

    def start(self):
        self.status = "printing"
        self.started_at = datetime.now()

    def complete(self):
        self.status = "completed"
        self.completed_at = datetime.now()

    def fail(self, error: str):
        self.status = "failed"
        self.completed_at = datetime.now()
        self.error_message = error

    def finish(self, result: PrintingResult):
        """Complete or fail the job from a printing result."""
        self.result = result.to_dict()['data']
        if result.was_successful():
            self.complete()
        else:
            self.fail(str(result.get_data().get('exception', 'Print failed')))
