from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from showdown.models import DealResult


@dataclass
class ResultRecord:
    event_id: int
    result: DealResult
    seed: Optional[int] = None
    created: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_payload(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"event_id": self.event_id, "created": self.created, "seed": self.seed}
        payload.update(self.result.to_payload())
        return payload


class ResultLog:
    """Completed deals kept in memory, oldest dropped past ``limit``."""

    def __init__(self, limit: int = 100) -> None:
        self.limit = limit
        self.records: Dict[int, ResultRecord] = {}
        self.history: List[int] = []
        self.next_id = 1

    def add(self, result: DealResult, seed: Optional[int] = None) -> ResultRecord:
        record = ResultRecord(event_id=self.next_id, result=result, seed=seed)
        self.next_id += 1
        self.records[record.event_id] = record
        self.history.append(record.event_id)
        while len(self.history) > self.limit:
            self.records.pop(self.history.pop(0), None)
        return record

    def get(self, event_id: int) -> Optional[ResultRecord]:
        return self.records.get(event_id)

    def __len__(self) -> int:
        return len(self.records)
