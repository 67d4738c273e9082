from __future__ import annotations

import json
from datetime import date
from typing import Iterable

from .models import TaskRecord
from .schemas import TaskExport


# PUBLIC_INTERFACE
def export_document(records: Iterable[TaskRecord]) -> str:
    """
    Serialize records as a pretty-printed JSON array.

    Each entry has the keys: id, task, date, priority, completed, createdAt.
    """
    items = [TaskExport.from_record(r).model_dump(mode="json", by_alias=True) for r in records]
    return json.dumps(items, indent=2, ensure_ascii=False)


# PUBLIC_INTERFACE
def export_filename(today: date) -> str:
    """Download name for an export made on the given day."""
    return f"todos_{today.isoformat()}.json"
