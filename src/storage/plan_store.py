from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from study_planner.models import SavedPlan

logger = logging.getLogger(__name__)


class PlanStore:
    """
    Saved plans in a single JSON file, keyed by (user_id, id).
    Plans are stored as opaque JSON objects.
    """

    def __init__(self, path: str = "data/plans.json"):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Plan store {self.path} unreadable, treating as empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Plan store {self.path} has unexpected shape, treating as empty")
            return []
        return [r for r in data if isinstance(r, dict)]

    def _load(self, record: Dict[str, Any]) -> Optional[SavedPlan]:
        try:
            return SavedPlan(**record)
        except ValidationError as e:
            logger.warning(f"Skipping malformed plan record {record.get('id')!r} in {self.path}: {e}")
            return None

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def save(self, user_id: str, plan: Dict[str, Any], title: Optional[str] = None) -> SavedPlan:
        record = SavedPlan(
            id=uuid.uuid4().hex,
            user_id=user_id,
            title=(title or "").strip() or "Untitled Plan",
            created_at=datetime.now(timezone.utc).isoformat(),
            plan=plan,
        )
        with self._lock:
            records = self._read()
            records.append(record.model_dump())
            self._write(records)
        logger.info(f"Saved plan {record.id} for user {user_id}")
        return record

    def list(self, user_id: str) -> List[dict]:
        with self._lock:
            records = self._read()
        mine = []
        for r in records:
            if r.get("user_id") != user_id:
                continue
            plan = self._load(r)
            if plan is not None:
                mine.append(plan)
        mine.sort(key=lambda p: p.created_at, reverse=True)
        return [p.summary_view() for p in mine]

    def get(self, user_id: str, plan_id: str) -> Optional[SavedPlan]:
        with self._lock:
            records = self._read()
        for r in records:
            if r.get("id") == plan_id and r.get("user_id") == user_id:
                return self._load(r)
        return None

    def delete(self, user_id: str, plan_id: str) -> bool:
        with self._lock:
            records = self._read()
            kept = [r for r in records if not (r.get("id") == plan_id and r.get("user_id") == user_id)]
            if len(kept) == len(records):
                return False
            self._write(kept)
        logger.info(f"Deleted plan {plan_id} for user {user_id}")
        return True
