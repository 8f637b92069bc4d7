import json
import time
from pathlib import Path
from typing import Dict

from .config import CALCULATOR_URL


def init_run_dir(run_dir: Path, run_id: str, inputs: Dict[str, str]) -> Path:
    run_dir.mkdir(parents=True, exist_ok=True)
    meta = {
        "run_id": run_id,
        "url": CALCULATOR_URL,
        "inputs": inputs,
        "app_name": "mortgage_agent",
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S"),
    }
    (run_dir / "meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
    print(f"[Artifacts] Initialized run directory at {run_dir}")
    return run_dir


def save_results(run_dir: Path, results: Dict[str, str]) -> None:
    out_path = Path(run_dir) / "results.json"
    try:
        out_path.write_text(json.dumps(results, indent=2), encoding="utf-8")
        print(f"[Artifacts] Results written to {out_path}")
    except Exception as e:
        print(f"[Artifacts] Failed to write results.json: {e}")
