"""
Exceptions and warnings for contract composition.

All errors are raised while contracts or contract machines are being
composed, never during simulation. A port leaving its interval along a
trajectory is reported as data by the monitor, not raised.
"""

from typing import Optional, Dict, Tuple, Any


class ContractError(Exception):
    """Base class for every contract composition failure."""


class ContractDefinitionError(ContractError, ValueError):
    """
    Raised when a contract is declared with an empty or backwards interval.

    Attributes:
        interval: The offending interval
    """

    def __init__(self, interval, message: Optional[str] = None):
        self.interval = interval
        super().__init__(message or f"the interval {interval} is empty or backwards")


class StructuralMismatchError(ContractError, ValueError):
    """
    Raised when a wiring diagram and the supplied contracts disagree on topology.

    Covers box/contract count mismatch, port/contract arity mismatch,
    duplicate box names and internal wires whose port names differ.

    Attributes:
        box_name: Name of the offending box (if a single box is at fault)
        box_id: Position of the offending box in the diagram
        wire: The offending internal wire (for port-name mismatches)
    """

    def __init__(self,
                 message: str,
                 box_name: Optional[str] = None,
                 box_id: Optional[int] = None,
                 wire=None):
        self.box_name = box_name
        self.box_id = box_id
        self.wire = wire
        super().__init__(message)


class ContractIncompatibilityError(ContractError):
    """
    Raised when the intervals at both ends of an internal wire do not overlap.

    The source box promises values the target box never accepts, so no
    behaviour of the composite can satisfy both contracts on that wire.

    Attributes:
        source_name: Name of the box driving the wire
        source_id: Position of the source box in the diagram
        target_name: Name of the box reading the wire
        target_id: Position of the target box in the diagram
        port: Port name carried by the wire
        source_interval: Output interval of the source port
        target_interval: Input interval of the target port
    """

    def __init__(self,
                 source_name: str,
                 source_id: int,
                 target_name: str,
                 target_id: int,
                 port: str,
                 source_interval,
                 target_interval):
        self.source_name = source_name
        self.source_id = source_id
        self.target_name = target_name
        self.target_id = target_id
        self.port = port
        self.source_interval = source_interval
        self.target_interval = target_interval
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Incompatible contract between {self.source_name} (id={self.source_id}) "
            f"and {self.target_name} (id={self.target_id}) at wire \"{self.port}\": "
            f"{self.source_interval} ∩ {self.target_interval} = ∅"
        )

    @property
    def edge(self) -> Tuple[str, str]:
        return (self.source_name, self.target_name)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with all exception attributes in serializable form
        """
        return {
            "source_name": self.source_name,
            "source_id": self.source_id,
            "target_name": self.target_name,
            "target_id": self.target_id,
            "port": self.port,
            "source_interval": str(self.source_interval),
            "target_interval": str(self.target_interval),
        }

    def format_report(self) -> str:
        """
        Format a detailed human-readable report.

        Returns:
            Multi-line string with full diagnostic information
        """
        lines = [
            "=" * 80,
            "INCOMPATIBLE CONTRACT",
            "=" * 80,
            "",
            f"Wire:         {self.port}",
            f"Source:       {self.source_name} (id={self.source_id})",
            f"Target:       {self.target_name} (id={self.target_id})",
            "",
            f"Source guarantees  {self.port:20s} ∈ {self.source_interval}",
            f"Target assumes     {self.port:20s} ∈ {self.target_interval}",
            "",
            "=" * 80,
            "",
            "The source output range and the target input range are disjoint:",
            "every value the source may emit on this wire violates the target.",
            "Widen the target's input interval or narrow the source's output.",
            "=" * 80,
        ]
        return "\n".join(lines)


class IntegrationFailure(RuntimeError):
    """
    Raised when the ODE solver cannot integrate a machine over the requested span.

    Attributes:
        status: Solver status code
        solver_message: Message reported by the solver
        t_reached: Last time the solver reached
        method: Name of the integration method
    """

    def __init__(self, status: int, solver_message: str, t_reached: float, method: str):
        self.status = status
        self.solver_message = solver_message
        self.t_reached = t_reached
        self.method = method
        super().__init__(
            f"Integration failed | Method: {method} | Status: {status} | "
            f"Reached t={t_reached:g} | {solver_message}"
        )


class ContractUndefinedWarning(UserWarning):
    """
    Emitted when an internal wire's source interval is not contained in the
    target interval. Composition proceeds; the behaviour of the target for the
    source values outside the overlap is undefined.
    """
