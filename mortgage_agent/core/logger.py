import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional


def to_auxiliary(record: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """Wrap each field in the {value, type} envelope log consumers expect."""
    return {
        field: {"value": value or "", "type": "string"}
        for field, value in record.items()
    }


class RunLogger:
    """Structured log sink for a single run.

    Records are printed, kept in memory, and appended to log.jsonl when a
    path is given.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self.records: List[Dict[str, Any]] = []

    def log(self, category: str, message: str, auxiliary: Optional[Dict[str, Any]] = None, level: int = 1) -> Dict[str, Any]:
        entry = {
            "category": category,
            "message": message,
            "level": level,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "auxiliary": auxiliary or {},
        }
        self.records.append(entry)

        print(f"[{category}] {message}")
        for key, aux in (auxiliary or {}).items():
            val = aux.get("value") if isinstance(aux, dict) else aux
            print(f"  - {key}: {val}")

        if self.path:
            try:
                with self.path.open("a", encoding="utf-8") as f:
                    f.write(json.dumps(entry) + "\n")
            except Exception as e:
                print(f"[Logger] Failed to write {self.path}: {e}")
        return entry
