"""
Text tables for contract evaluation results.

Three shapes are rendered:
- AtomicVerdicts: pass/fail per port of a single machine
- CompositeVerdicts: pass/fail per port of every box of a composed machine
- FailureReport: failure intervals per port of every box
"""

from typing import List, Sequence, Union

from ..machines import AtomicVerdicts, CompositeVerdicts, format_path
from ..monitoring import FailureReport


def _format_table(headers: Sequence[Sequence[str]], rows: Sequence[Sequence[str]]) -> str:
    """
    Lay out cells in aligned columns. Cells may span several lines.

    Args:
        headers: Header rows (each a list of cells)
        rows: Body rows (each a list of cells)
    """
    ncols = len(headers[0])
    split_rows = [[cell.split("\n") for cell in row] for row in rows]
    split_headers = [[[cell] for cell in header] for header in headers]

    widths = [0] * ncols
    for row in split_headers + split_rows:
        for col, lines in enumerate(row):
            widths[col] = max(widths[col], *(len(line) for line in lines))

    def render_row(row) -> List[str]:
        height = max(len(lines) for lines in row)
        out = []
        for k in range(height):
            cells = [
                (lines[k] if k < len(lines) else "").center(widths[col])
                for col, lines in enumerate(row)
            ]
            out.append(" " + " │ ".join(cells) + " ")
        return out

    separator = "─" + "─┼─".join("─" * w for w in widths) + "─"
    lines = []
    for header in split_headers:
        lines.extend(render_row(header))
    lines.append(separator)
    for i, row in enumerate(split_rows):
        if i:
            lines.append(separator)
        lines.extend(render_row(row))
    return "\n".join(lines)


def _verdict_lines(named: Sequence) -> str:
    return "\n".join(f"{port} : {str(ok).lower()}" for port, ok in named)


def _format_range(port: str, rng, out_type: str) -> str:
    start, stop = rng
    if out_type == "index":
        return f"{port} : {int(start)} , {int(stop)}"
    return f"{port} : {start:f} , {stop:f}"


def _range_lines(ports, out_type: str) -> str:
    return "\n".join(
        _format_range(port, rng, out_type)
        for port, ranges in ports
        for rng in ranges
    )


def render_atomic(verdicts: AtomicVerdicts) -> str:
    headers = [["input", "output"], ["port: contract", "port: contract"]]
    rows = [[_verdict_lines(verdicts.named_input()), _verdict_lines(verdicts.named_output())]]
    return _format_table(headers, rows)


def render_composite(verdicts: CompositeVerdicts) -> str:
    headers = [["box", "input", "output"], ["directory", "wire: contract", "wire: contract"]]
    rows = [
        [format_path(path), _verdict_lines(leaf.named_input()), _verdict_lines(leaf.named_output())]
        for path, leaf in verdicts.flatten().items()
    ]
    return _format_table(headers, rows)


def render_failures(report: FailureReport) -> str:
    headers = [["box", "input", "output"],
               ["directory", "wire: failure interval", "wire: failure interval"]]
    rows = [
        [format_path(path),
         _range_lines(failures.input, report.out_type),
         _range_lines(failures.output, report.out_type)]
        for path, failures in report.entries.items()
    ]
    return _format_table(headers, rows)


def render(result: Union[AtomicVerdicts, CompositeVerdicts, FailureReport]) -> str:
    """Render any of the three result shapes as a text table"""
    if isinstance(result, AtomicVerdicts):
        return render_atomic(result)
    if isinstance(result, CompositeVerdicts):
        return render_composite(result)
    if isinstance(result, FailureReport):
        return render_failures(result)
    raise TypeError(f"cannot render {type(result).__name__}")


def print_report(result: Union[AtomicVerdicts, CompositeVerdicts, FailureReport]):
    print(render(result))
