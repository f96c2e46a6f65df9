# app/agent/graph.py
from langgraph.graph import START, END, StateGraph

from app.agent.state import DoctorVisitState
from app.agent.nodes import compose_node, generate_node, format_node

builder = StateGraph(DoctorVisitState)

builder.add_node("compose", compose_node)
builder.add_node("generate", generate_node)
builder.add_node("format", format_node)

builder.add_edge(START, "compose")
builder.add_edge("compose", "generate")
builder.add_edge("generate", "format")
builder.add_edge("format", END)

# single-shot flow, nothing to resume -> no checkpointer
doctor_visit_graph = builder.compile()
