from .types import ScenarioState


def record_step(state: ScenarioState, name: str, detail: str = "") -> ScenarioState:
    """Advance the step counter and append a history line."""
    step = state.get("step", 0) + 1
    state["step"] = step
    entry = f"Step {step}: {name}"
    if detail:
        entry += f" ({detail})"
    history = list(state.get("history") or [])
    history.append(entry)
    state["history"] = history
    print(f"[Driver] {entry}")
    return state
