"""
Wiring diagram visualization.

Creates a directed graph showing boxes, wires and feedback loops, with the
boxes that violated their contract highlighted.
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import networkx as nx
from typing import Optional, Set

from ..monitoring import FailureReport
from ..wiring import WiringDiagram


def violated_boxes(report: FailureReport) -> Set[str]:
    """Names of the top-level boxes with at least one failing port below them"""
    return {path[0] for path, _, _, _ in report.violations() if path}


def draw_wiring_diagram(diagram: WiringDiagram,
                        output_path: str,
                        report: Optional[FailureReport] = None,
                        title: str = "Wiring Diagram"):
    """
    Draw a wiring diagram showing boxes, wires and contract violations.

    Args:
        diagram: The wiring diagram to visualize
        output_path: Path to save the figure
        report: Optional failure report; boxes with violations are drawn red
        title: Title for the diagram
    """
    G = nx.DiGraph(diagram.to_networkx())
    labels = {node: data['name'] for node, data in G.nodes(data=True)}

    # Wires inside a feedback loop
    loops = diagram.find_feedback_loops()
    in_loop = {}
    for k, loop in enumerate(loops):
        for box_id, box in enumerate(diagram.boxes):
            if box.name in loop:
                in_loop[box_id] = k
    loop_edges = [(u, v) for u, v in G.edges()
                  if u in in_loop and v in in_loop and in_loop[u] == in_loop[v]]
    regular_edges = [e for e in G.edges() if e not in loop_edges]

    failed = violated_boxes(report) if report is not None else set()

    fig, ax = plt.subplots(figsize=(12, 8))
    ax.set_title(title, fontsize=16, fontweight='bold')
    ax.axis('off')

    pos = nx.spring_layout(G, k=2, iterations=50, seed=42)

    node_colors = []
    node_sizes = []
    for node in G.nodes():
        if node in ("input", "output"):
            color = '#ffffff'
            size = 1200
        elif labels[node] in failed:
            color = '#ff6b6b'  # Red - contract violated
            size = 2500
        elif report is not None:
            color = '#a8dadc'  # Light blue - contract held
            size = 2200
        else:
            color = '#e0e0e0'  # Gray - not monitored
            size = 2200
        node_colors.append(color)
        node_sizes.append(size)

    nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=node_sizes,
                           edgecolors='#333333', alpha=0.9, ax=ax)
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=10, font_weight='bold', ax=ax)

    if regular_edges:
        nx.draw_networkx_edges(G, pos, edgelist=regular_edges,
                               edge_color='#666666', width=2, alpha=0.6,
                               arrows=True, arrowsize=20, ax=ax,
                               arrowstyle='->', connectionstyle='arc3,rad=0.1')
    if loop_edges:
        nx.draw_networkx_edges(G, pos, edgelist=loop_edges,
                               edge_color='#e63946', width=3, alpha=0.8,
                               arrows=True, arrowsize=25, ax=ax,
                               arrowstyle='->', connectionstyle='arc3,rad=0.1')

    edge_labels = {(u, v): data['port'] for u, v, data in G.edges(data=True)}
    nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=8, ax=ax)

    legend_elements = [
        mpatches.Patch(color='#ff6b6b', label='Contract violated'),
        mpatches.Patch(color='#a8dadc', label='Contract held'),
        mpatches.Patch(color='#e0e0e0', label='Not monitored'),
        mpatches.Patch(color='#e63946', label='Feedback wire'),
    ]
    ax.legend(handles=legend_elements, loc='upper left', fontsize=10)

    if loops:
        loop_str = '; '.join(', '.join(loop) for loop in loops)
        ax.text(0.5, 0.02, f"Feedback loops: {loop_str}",
                transform=ax.transAxes, ha='center', fontsize=10,
                bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.5))

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"Wiring diagram saved to {output_path}")
