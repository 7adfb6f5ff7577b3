"""Base component class: a dynamical box with declared port contracts."""

from abc import ABC, abstractmethod
from typing import List, Sequence
import numpy as np

from ..contracts import Interval
from ..machines import ContractMachine
from ..wiring import WiringDiagram


class BaseComponent(ABC):
    """
    Base class for components of the example systems.

    Each component has:
    - Ordered input and output port names
    - A state vector of fixed length
    - dynamics() and readout() functions
    - One contract interval per port
    """
    kind = "continuous"

    def __init__(self, name: str, inputs: Sequence[str], outputs: Sequence[str], nstates: int):
        self.name = name
        self.inputs = list(inputs)
        self.outputs = list(outputs)
        self.nstates = nstates

    @abstractmethod
    def dynamics(self, u: np.ndarray, x: np.ndarray, p=None, t: float = 0.0) -> List[float]:
        """State derivative (or next state for discrete components)."""

    @abstractmethod
    def readout(self, u: np.ndarray, p=None, t: float = 0.0) -> List[float]:
        """Output port values."""

    @abstractmethod
    def input_contracts(self) -> List[Interval]:
        """Operating interval of each input port."""

    @abstractmethod
    def output_contracts(self) -> List[Interval]:
        """Guaranteed interval of each output port."""

    def to_contract_machine(self) -> ContractMachine:
        return ContractMachine.atomic(
            self.input_contracts(), self.nstates, self.output_contracts(),
            self.dynamics, self.readout, kind=self.kind
        )

    def add_to(self, diagram: WiringDiagram) -> int:
        """Add a box for this component and return its id"""
        return diagram.add_box(self.name, self.inputs, self.outputs)
