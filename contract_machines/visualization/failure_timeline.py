"""
Failure timeline plots.

One row per monitored port, with a bar for every interval during which the
port was outside its contract.
"""

import matplotlib.pyplot as plt
from typing import Optional, Tuple

from ..machines import format_path
from ..monitoring import FailureReport


def plot_failure_timeline(report: FailureReport,
                          output_path: str,
                          span: Optional[Tuple[float, float]] = None,
                          title: str = "Contract Failures",
                          show_clean: bool = True):
    """
    Plot the failure intervals of every port.

    Args:
        report: Failure report from `check_contract`
        output_path: Path to save the figure
        span: x-axis limits; defaults to the span of the report
        title: Title for the figure
        show_clean: Also draw rows for ports that never failed
    """
    rows = []
    for path, failures in report.entries.items():
        for direction, ports in (("in", failures.input), ("out", failures.output)):
            for port, ranges in ports:
                if ranges or show_clean:
                    rows.append((f"{format_path(path)} {direction}:{port}", direction, ranges))

    if not rows:
        print("No ports to plot")
        return

    span = span or report.span
    unit = "Time" if report.out_type == "time" else "Sample index"

    fig, ax = plt.subplots(figsize=(12, max(2.0, 0.45 * len(rows) + 1.5)))
    ax.set_title(title, fontsize=14, fontweight='bold')

    colors = {"in": '#F77F00', "out": '#E63946'}
    for y, (label, direction, ranges) in enumerate(rows):
        color = colors[direction]
        # Zero-length runs (a single failing sample) still get a visible tick
        bars = [(start, max(stop - start, 1e-9)) for start, stop in ranges]
        if bars:
            ax.broken_barh(bars, (y - 0.35, 0.7), facecolors=color, alpha=0.8,
                           edgecolor=color, linewidth=1.5)

    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels([label for label, _, _ in rows], fontsize=9)
    ax.invert_yaxis()
    if report.out_type == "time":
        ax.set_xlim(*span)
    ax.set_xlabel(unit, fontsize=12)
    ax.grid(True, alpha=0.3, axis='x')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"Failure timeline saved to {output_path}")
