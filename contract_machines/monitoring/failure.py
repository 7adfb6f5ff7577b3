"""
Reduction of pass/fail signals to failure intervals.
"""

from typing import List, Optional, Sequence, Tuple


OUT_TYPES = ("time", "index")

Range = Tuple[float, float]


def failure_intervals(signal: Sequence,
                      times: Optional[Sequence[float]] = None,
                      out_type: str = "time") -> List[Range]:
    """
    Maximal runs during which a signal is failing.

    A sample is failing when its value is <= 0 (False). Consecutive samples
    are compared pairwise: a failing -> passing edge at i closes the open run
    at i - 1, and a passing -> failing edge at i opens a run at i. A run still
    open at the last sample is closed there. The first run starts at 0. A
    single sample has no neighbour to compare with and yields no run.

    Args:
        signal: Pass/fail value per sample
        times: Sample times; used to map indices when out_type is "time"
        out_type: "time" for (t_start, t_stop) pairs, "index" for 0-based
            (start, stop) sample indices

    Returns:
        Ordered list of (start, stop) pairs, inclusive at both ends

    Example:
        >>> failure_intervals([1, 1, 0, 0, 1, 1, 1, 0], out_type="index")
        [(2, 3), (7, 7)]
    """
    if out_type not in OUT_TYPES:
        raise ValueError(f"out_type must be one of {OUT_TYPES}, got {out_type!r}")

    failing = [not (value > 0) for value in signal]
    n = len(failing)

    intervals = []
    start = 0
    for i in range(1, n):
        if failing[i - 1] and not failing[i]:       # rising signal
            intervals.append((start, i - 1))
        elif failing[i] and not failing[i - 1]:     # falling signal
            start = i

    if n > 1 and failing[-1]:
        intervals.append((start, n - 1))

    if times is not None and out_type == "time":
        intervals = [(float(times[a]), float(times[b])) for a, b in intervals]

    return intervals
