import json
from pathlib import Path
from typing import Callable, Dict, Optional

from .config import OVERLAY_DISPLAY_MS
from .errors import ActionExecutionError
from .executor import execute_action
from .types import ResolvedAction


class ActionCache:
    """Maps an instruction to a previously resolved, replayable action.

    Entries never expire. A cached action that no longer works against the
    live page is replaced by a fresh resolution and retried once.
    """

    def __init__(
        self,
        resolver,
        path: Optional[Path] = None,
        overlay=None,
        executor: Callable = execute_action,
        overlay_ms: int = OVERLAY_DISPLAY_MS,
    ):
        self.resolver = resolver
        self.path = Path(path) if path else None
        self.overlay = overlay
        self.executor = executor
        self.overlay_ms = overlay_ms
        self.store: Dict[str, ResolvedAction] = {}

    def __contains__(self, instruction: str) -> bool:
        return instruction in self.store

    def __len__(self) -> int:
        return len(self.store)

    def get(self, instruction: str) -> Optional[ResolvedAction]:
        return self.store.get(instruction)

    def put(self, instruction: str, action: ResolvedAction) -> None:
        self.store[instruction] = action
        self.save()

    def clear(self) -> None:
        self.store = {}
        self.save()

    def load(self) -> "ActionCache":
        if not self.path or not self.path.exists():
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception as e:
            print(f"[Cache] Ignoring unreadable cache file {self.path}: {e}")
            return self
        if not isinstance(data, dict):
            print(f"[Cache] Ignoring cache file {self.path}: not a JSON object")
            return self
        self.store = {k: v for k, v in data.items() if isinstance(v, dict)}
        print(f"[Cache] Loaded {len(self.store)} cached actions from {self.path}")
        return self

    def save(self) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.store, indent=2), encoding="utf-8")

    def _resolve_and_store(self, page, instruction: str) -> ResolvedAction:
        action = self.resolver.resolve(page, instruction)
        self.put(instruction, action)
        print(f"[Cache] Stored action for '{instruction}': {action.get('method')} {action.get('selector')}")
        if self.overlay is not None:
            self.overlay.draw(page, [action])
            page.wait_for_timeout(self.overlay_ms)
            self.overlay.clear(page)
        return action

    def act(self, page, instruction: str) -> ResolvedAction:
        """Run the instruction, reusing a cached action when one exists."""
        cached = self.store.get(instruction)
        if cached is not None:
            print(f"[Cache] Hit for '{instruction}'")
            try:
                self.executor(page, cached)
                return cached
            except ActionExecutionError as e:
                print(f"[Cache] Cached action is stale, re-resolving: {e}")
        else:
            print(f"[Cache] Miss for '{instruction}'")

        action = self._resolve_and_store(page, instruction)
        self.executor(page, action)
        return action
