"""Contract machines, their evaluators and composition."""

from .verdicts import AtomicVerdicts, CompositeVerdicts, PortVerdicts, Path, format_path
from .evaluator import Evaluator, AtomicEvaluator, CompositeEvaluator
from .contract_machine import ContractMachine, compose

__all__ = [
    'AtomicVerdicts', 'CompositeVerdicts', 'PortVerdicts', 'Path', 'format_path',
    'Evaluator', 'AtomicEvaluator', 'CompositeEvaluator',
    'ContractMachine', 'compose'
]
