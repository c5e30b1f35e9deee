"""Build the LangGraph keypress graph."""
from langgraph.graph import StateGraph, END, START
from calc_engine.graph.state import KeypressState
from calc_engine.graph.nodes import (
    NodeName, apply_node, evaluate_keypress_node, route_after_apply
)


def build_graph():
    """Build and return the compiled graph that processes one keypress."""
    graph = StateGraph(KeypressState)

    graph.add_node(NodeName.APPLY.value, apply_node)
    graph.add_node(NodeName.EVALUATE.value, evaluate_keypress_node)

    graph.add_edge(START, NodeName.APPLY.value)
    graph.add_conditional_edges(
        NodeName.APPLY.value,
        route_after_apply,
        {NodeName.EVALUATE.value: NodeName.EVALUATE.value, "end": END},
    )
    graph.add_edge(NodeName.EVALUATE.value, END)

    return graph.compile()


if __name__ == "__main__":
    graph = build_graph()
    print("Graph built successfully!")
    print(f"Nodes: {list(graph.nodes.keys())}")
