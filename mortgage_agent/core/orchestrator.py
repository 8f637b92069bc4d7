from pathlib import Path
from typing import Callable, Dict, Optional
from uuid import uuid4

from ..agents.extractor import LLMExtractor
from ..agents.operator import LLMResolver
from ..utils.overlay import OverlayRenderer
from .artifacts import init_run_dir
from .cache import ActionCache
from .config import CACHE_PATH, DEFAULT_INPUTS, OUT_DIR
from .graph import build_graph
from .logger import RunLogger
from .session import open_session
from .types import ScenarioState


def run(
    inputs: Optional[Dict[str, str]] = None,
    session_factory: Callable = open_session,
    resolver=None,
    extractor=None,
    cache_path: Optional[Path] = CACHE_PATH,
    out_dir: Path = OUT_DIR,
) -> ScenarioState:
    """Run the calculator scenario once; the session is always released."""
    scenario_inputs = dict(DEFAULT_INPUTS)
    scenario_inputs.update(inputs or {})

    run_id = str(uuid4())
    run_dir = init_run_dir(Path(out_dir) / f"run_{run_id}", run_id, scenario_inputs)
    logger = RunLogger(run_dir / "log.jsonl")

    cache = ActionCache(
        resolver or LLMResolver(),
        path=cache_path,
        overlay=OverlayRenderer(run_dir),
    ).load()

    app = build_graph()
    print(f"[Driver] Starting run {run_id}")

    session = session_factory()
    try:
        state: ScenarioState = {
            "run_id": run_id,
            "run_dir": str(run_dir),
            "inputs": scenario_inputs,
            "history": [],
            "step": 0,
            "results": None,
            "done": False,
            "page": session.page,
            "cache": cache,
            "extractor": extractor or LLMExtractor(),
            "logger": logger,
        }
        final_state = app.invoke(state, config={"run_name": "mortgage_calculator"})
    finally:
        session.close()

    print("[Driver] Run completed")
    return final_state


def print_summary(final_state: ScenarioState) -> None:
    print("\n=== Mortgage agent result ===")
    print("Run dir:", final_state.get("run_dir"))
    history = final_state.get("history") or []
    if history:
        print("Steps:")
        for entry in history:
            print(f"  - {entry}")
    results = final_state.get("results") or {}
    if results:
        print("Results:")
        for field, value in results.items():
            print(f"  - {field}: {value or '(not found)'}")
