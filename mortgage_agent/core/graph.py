from langgraph.graph import END, StateGraph

from .steps import (
    debt_step,
    down_payment_step,
    expenses_step,
    extract,
    income_step,
    location_step,
    log_results,
    navigate,
    property_type_step,
    submit,
    wait_for_results_step,
)
from .types import ScenarioState

SCENARIO_NODES = [
    ("navigate", navigate),
    ("location", location_step),
    ("property_type", property_type_step),
    ("income", income_step),
    ("down_payment", down_payment_step),
    ("expenses", expenses_step),
    ("debt", debt_step),
    ("submit", submit),
    ("wait_for_results", wait_for_results_step),
    ("extract", extract),
    ("log_results", log_results),
]


def build_graph():
    graph = StateGraph(ScenarioState)
    for name, node in SCENARIO_NODES:
        graph.add_node(name, node)

    graph.set_entry_point(SCENARIO_NODES[0][0])
    for (name, _), (next_name, _) in zip(SCENARIO_NODES, SCENARIO_NODES[1:]):
        graph.add_edge(name, next_name)
    graph.add_edge(SCENARIO_NODES[-1][0], END)

    return graph.compile()
