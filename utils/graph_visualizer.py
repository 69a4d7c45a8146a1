# utils/graph_visualizer.py

import os
from typing import Iterable, Optional

from model.state_value import StateValue, state_key
from utils.logger import get_logger

# Conditional import of graphviz
try:
    from graphviz import Digraph

    GRAPHVIZ_AVAILABLE = True
except ImportError:
    GRAPHVIZ_AVAILABLE = False

logger = get_logger()

VISUALIZATION_OUTPUT_FOLDER = "graph_visualizations"


def _node_name(key: str) -> str:
    # graphviz treats ':' as a port separator in node names
    return key.replace(":", "_")


def _edge_label(step) -> str:
    label = step.event
    if step.cost is not None:
        label += f"\ncost={step.cost}"
    return label


def transition_graph_to_dot(
    graph,
    initial: Optional[StateValue] = None,
    highlight: Iterable[StateValue] = (),
    fmt: str = "png",
) -> "Digraph":
    """
    Builds a Graphviz Digraph for a transition graph.
    Every source and target state becomes a node labelled with its canonical key;
    every RC-step becomes an edge labelled with its event (and cost, when annotated).

    Args:
        graph: Mapping of source-state key to outgoing RC-steps.
        initial: Optional initial state, drawn with a double border.
        highlight: States to fill (e.g. states visited by a replayed trace).
        fmt: The output format used when the graph is rendered.
    """
    if not GRAPHVIZ_AVAILABLE:
        raise RuntimeError("graphviz is not installed; install it with: pip install graphviz")

    dot = Digraph(comment="Transition graph", format=fmt)
    dot.attr(rankdir="LR", nodesep="0.5", ranksep="0.6")

    initial_key = state_key(initial) if initial is not None else None
    highlighted = {state_key(s) for s in highlight}

    keys = []
    for source_key, steps in graph.items():
        keys.append(source_key)
        keys.extend(step.target_key for step in steps)

    for key in dict.fromkeys(keys):
        attrs = {"shape": "doublecircle" if key == initial_key else "ellipse"}
        if key in highlighted:
            attrs.update(style="filled", fillcolor="palegreen")
        dot.node(_node_name(key), key, **attrs)

    for source_key, steps in graph.items():
        for step in steps:
            dot.edge(_node_name(source_key), _node_name(step.target_key), label=_edge_label(step))

    return dot


def render_transition_graph(graph, base_filename: str, initial: Optional[StateValue] = None,
                            fmt: str = "png") -> Optional[str]:
    """
    Renders a transition graph to an image in the 'graph_visualizations' folder.

    Returns:
        The rendered file path, or None if graphviz is unavailable or rendering failed.
    """
    if not GRAPHVIZ_AVAILABLE:
        logger.warning("Graphviz library not installed. Skipping transition graph visualization. "
                       "To enable, install graphviz: pip install graphviz")
        return None

    dot = transition_graph_to_dot(graph, initial=initial, fmt=fmt)

    try:
        os.makedirs(VISUALIZATION_OUTPUT_FOLDER, exist_ok=True)
        output_path = os.path.join(VISUALIZATION_OUTPUT_FOLDER, base_filename)
    except OSError as e:
        logger.error(f"Could not create directory {VISUALIZATION_OUTPUT_FOLDER}: {e}. "
                     f"Saving to current directory instead.")
        output_path = base_filename

    try:
        rendered = dot.render(output_path, view=False, cleanup=True)
        logger.info(f"Transition graph visualization saved to {rendered}")
        return rendered
    except Exception as e:
        # graphviz raises ExecutableNotFound when the 'dot' binary is missing
        logger.warning(f"Failed to render transition graph to {output_path}.{fmt}: {e}. "
                       f"Ensure Graphviz executables are installed and in PATH.")
        return None
