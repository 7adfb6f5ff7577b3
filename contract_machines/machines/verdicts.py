"""
Pass/fail verdicts of contract evaluation.

An atomic machine yields one verdict per input and output port. A composed
machine yields a directory keyed by box name whose entries are themselves
verdicts, so nesting follows the nesting of the diagrams.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Sequence, Tuple, Union


Path = Tuple[str, ...]


def format_path(path: Path) -> str:
    """Dotted form of a box path; the empty path is the machine itself."""
    return ".".join(path) if path else "<machine>"


def _port_names(names: Sequence[str], count: int) -> List[str]:
    if names:
        return list(names)
    return [str(i + 1) for i in range(count)]


@dataclass(frozen=True)
class AtomicVerdicts:
    """
    Verdicts of a single box.

    Attributes:
        input: True where the input port value lies in its interval
        output: True where the output port value lies in its interval
        input_ports: Input port names (empty when evaluated outside a diagram)
        output_ports: Output port names (empty when evaluated outside a diagram)
    """
    input: Tuple[bool, ...]
    output: Tuple[bool, ...]
    input_ports: Tuple[str, ...] = ()
    output_ports: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'input', tuple(bool(v) for v in self.input))
        object.__setattr__(self, 'output', tuple(bool(v) for v in self.output))
        object.__setattr__(self, 'input_ports', tuple(self.input_ports))
        object.__setattr__(self, 'output_ports', tuple(self.output_ports))

    def with_ports(self, input_ports: Sequence[str], output_ports: Sequence[str]) -> 'AtomicVerdicts':
        return replace(self, input_ports=tuple(input_ports), output_ports=tuple(output_ports))

    def named_input(self) -> List[Tuple[str, bool]]:
        return list(zip(_port_names(self.input_ports, len(self.input)), self.input))

    def named_output(self) -> List[Tuple[str, bool]]:
        return list(zip(_port_names(self.output_ports, len(self.output)), self.output))

    @property
    def passed(self) -> bool:
        return all(self.input) and all(self.output)

    def flatten(self) -> Dict[Path, 'AtomicVerdicts']:
        return {(): self}


@dataclass(frozen=True)
class CompositeVerdicts:
    """
    Verdicts of a composed machine, keyed by box name in box order.
    """
    children: Dict[str, 'PortVerdicts'] = field(default_factory=dict)

    def __getitem__(self, name: str) -> 'PortVerdicts':
        return self.children[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    @property
    def passed(self) -> bool:
        return all(child.passed for child in self.children.values())

    def flatten(self) -> Dict[Path, AtomicVerdicts]:
        """
        Fully qualified directory of leaf boxes.

        Each child's paths are prefixed with the child's box name.
        """
        leaves = {}
        for name, child in self.children.items():
            for path, leaf in child.flatten().items():
                leaves[(name,) + path] = leaf
        return leaves


PortVerdicts = Union[AtomicVerdicts, CompositeVerdicts]
