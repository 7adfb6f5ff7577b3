"""
Composition of static contracts over a wiring diagram.

Along each internal wire the source box's output interval must overlap the
target box's input interval. The composite contract exposes, for every
external wire, the interval of the box port that wire touches.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Union
import warnings

from .interval import Interval
from .static_contract import StaticContract
from ..exceptions import (
    ContractIncompatibilityError,
    ContractUndefinedWarning,
    StructuralMismatchError,
)
from ..wiring import WiringDiagram, Wire


ContractsArg = Union[Sequence[StaticContract], Mapping[str, StaticContract]]


def with_default_contracts(diagram: WiringDiagram,
                           contracts: Mapping[str, StaticContract]) -> Dict[str, StaticContract]:
    """
    Fill in an unconstrained contract for every box missing from `contracts`.

    Returns a new mapping; `contracts` itself is left untouched.
    """
    augmented = dict(contracts)
    for box in diagram.boxes:
        if box.name not in augmented:
            augmented[box.name] = StaticContract.unconstrained(box.ninputs, box.noutputs)
    return augmented


def order_by_boxes(diagram: WiringDiagram, mapping: Mapping[str, object], kind: str = "contract") -> list:
    """
    Reorder a name-keyed mapping into box declaration order.

    Raises:
        StructuralMismatchError: If a box has no entry in the mapping
    """
    ordered = []
    for box_id, box in enumerate(diagram.boxes):
        if box.name not in mapping:
            raise StructuralMismatchError(
                f"no {kind} given for box {box.name} (id={box_id})",
                box_name=box.name, box_id=box_id
            )
        ordered.append(mapping[box.name])
    return ordered


def check_structure(diagram: WiringDiagram, contracts: Sequence[StaticContract]):
    """
    Check that the contracts line up with the boxes of the diagram.

    Raises:
        StructuralMismatchError: On count, name or arity mismatch
    """
    if diagram.nboxes != len(contracts):
        raise StructuralMismatchError(
            f"there are {diagram.nboxes} boxes but {len(contracts)} contracts"
        )

    # Composite results are addressed by box name
    if diagram.nboxes > 1:
        counts = Counter(diagram.box_names())
        duplicates = sorted(name for name, n in counts.items() if n > 1)
        if duplicates:
            raise StructuralMismatchError(
                f"box names must be unique, found duplicates: {', '.join(duplicates)}",
                box_name=duplicates[0]
            )

    for box_id, (box, contract) in enumerate(zip(diagram.boxes, contracts)):
        if box.ninputs != contract.ninputs or box.noutputs != contract.noutputs:
            raise StructuralMismatchError(
                f"number of ports do not match number of contracts at {box.name} (id={box_id}): "
                f"ports {box.ninputs}→{box.noutputs}, contract {contract.ninputs}→{contract.noutputs}",
                box_name=box.name, box_id=box_id
            )


@dataclass(frozen=True)
class WireCheck:
    """
    Contract check of a single internal wire.

    Attributes:
        wire: The internal wire
        source_name: Name of the box driving the wire
        target_name: Name of the box reading the wire
        port: Port name shared by both ends
        source_interval: Output interval of the source port
        target_interval: Input interval of the target port
        overlap: Intersection of both intervals
    """
    wire: Wire
    source_name: str
    target_name: str
    port: str
    source_interval: Interval
    target_interval: Interval
    overlap: Interval

    @property
    def compatible(self) -> bool:
        """The two intervals share at least one value"""
        return not self.overlap.is_empty()

    @property
    def defined(self) -> bool:
        """Every value the source may emit is accepted by the target"""
        return self.overlap == self.source_interval

    def incompatibility(self) -> ContractIncompatibilityError:
        return ContractIncompatibilityError(
            source_name=self.source_name,
            source_id=self.wire.source.box,
            target_name=self.target_name,
            target_id=self.wire.target.box,
            port=self.port,
            source_interval=self.source_interval,
            target_interval=self.target_interval,
        )

    def undefined_message(self) -> str:
        return (
            f"undefined contract between {self.source_name} (id={self.wire.source.box}) "
            f"and {self.target_name} (id={self.wire.target.box}) at wire \"{self.port}\": "
            f"{self.source_interval} ∩ {self.target_interval} ≠ {self.source_interval}"
        )


def inspect_wire(diagram: WiringDiagram, wire: Wire, contracts: Sequence[StaticContract]) -> WireCheck:
    """
    Intersect the intervals at both ends of an internal wire.

    Raises:
        StructuralMismatchError: If the port names at both ends differ
    """
    source_box = diagram.box(wire.source.box)
    target_box = diagram.box(wire.target.box)

    source_var = source_box.output_ports[wire.source.port]
    target_var = target_box.input_ports[wire.target.port]
    if source_var != target_var:
        raise StructuralMismatchError(
            f"wire \"{source_var}\" of {source_box.name} (id={wire.source.box}) does not match "
            f"wire \"{target_var}\" of {target_box.name} (id={wire.target.box})",
            wire=wire
        )

    source_interval = contracts[wire.source.box].outputs[wire.source.port]
    target_interval = contracts[wire.target.box].inputs[wire.target.port]

    return WireCheck(
        wire=wire,
        source_name=source_box.name,
        target_name=target_box.name,
        port=source_var,
        source_interval=source_interval,
        target_interval=target_interval,
        overlap=source_interval & target_interval,
    )


def compose_contracts(diagram: WiringDiagram, contracts: ContractsArg) -> StaticContract:
    """
    Compose the contracts of the boxes of a diagram into one contract.

    Args:
        diagram: The wiring diagram
        contracts: One contract per box in box order, or a mapping from box
            name to contract (boxes missing from the mapping are unconstrained)

    Returns:
        StaticContract of the composite, one interval per external wire

    Raises:
        StructuralMismatchError: If the contracts do not fit the diagram
        ContractIncompatibilityError: If an internal wire has disjoint intervals

    Warns:
        ContractUndefinedWarning: If an internal wire's source interval is not
            contained in its target interval
    """
    if isinstance(contracts, Mapping):
        contracts = order_by_boxes(diagram, with_default_contracts(diagram, contracts))
    else:
        contracts = list(contracts)

    check_structure(diagram, contracts)

    for wire in diagram.internal_wires():
        check = inspect_wire(diagram, wire, contracts)
        if not check.compatible:
            raise check.incompatibility()
        if not check.defined:
            warnings.warn(check.undefined_message(), ContractUndefinedWarning, stacklevel=2)

    inputs = [contracts[w.target.box].inputs[w.target.port] for w in diagram.input_wires()]
    outputs = [contracts[w.source.box].outputs[w.source.port] for w in diagram.output_wires()]
    return StaticContract(inputs, outputs)


class ValidationResult:
    """Result of a validation check"""

    def __init__(self, passed: bool, message: str = "", details: List[str] = None,
                 checks: List[WireCheck] = None):
        self.passed = passed
        self.message = message
        self.details = details if details is not None else []
        self.checks = checks if checks is not None else []

    def __str__(self) -> str:
        status = "✓ PASSED" if self.passed else "✗ FAILED"
        result = f"{status}: {self.message}"
        if self.details:
            result += "\n  Details:\n    " + "\n    ".join(self.details)
        return result


class CompatibilityChecker:
    """
    Reports the contract compatibility of every internal wire without raising.

    A wire is incompatible when the source output interval and the target
    input interval are disjoint, and undefined when they overlap but the
    source interval is not contained in the target interval.

    Formally, for a wire carrying port x: O_source(x) ⊆ I_target(x).
    """

    def __init__(self, diagram: WiringDiagram):
        self.diagram = diagram

    def check(self, contracts: ContractsArg) -> ValidationResult:
        """
        Check every internal wire against the given contracts.

        Structural problems (wrong counts, duplicate names, mismatched port
        names) still raise StructuralMismatchError, since the wires cannot be
        paired with intervals at all.
        """
        if isinstance(contracts, Mapping):
            contracts = order_by_boxes(self.diagram, with_default_contracts(self.diagram, contracts))
        else:
            contracts = list(contracts)
        check_structure(self.diagram, contracts)

        checks = [inspect_wire(self.diagram, w, contracts) for w in self.diagram.internal_wires()]

        incompatible = [c for c in checks if not c.compatible]
        undefined = [c for c in checks if c.compatible and not c.defined]

        details = [str(c.incompatibility()) for c in incompatible]
        details += [c.undefined_message() for c in undefined]

        if incompatible:
            return ValidationResult(
                passed=False,
                message=f"{len(incompatible)} incompatible wire(s)",
                details=details,
                checks=checks
            )
        if undefined:
            return ValidationResult(
                passed=True,
                message=f"Composable, {len(undefined)} wire(s) with undefined behaviour",
                details=details,
                checks=checks
            )
        return ValidationResult(
            passed=True,
            message="Every internal wire is strictly compatible",
            checks=checks
        )
