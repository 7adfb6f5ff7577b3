"""
Main execution script for contract monitoring experiments.

Composes each scenario, checks the static contracts, simulates the composed
dynamics, monitors the contracts along the trajectory and generates outputs.
"""

import os
import warnings
from datetime import datetime

from contract_machines.contracts import CompatibilityChecker
from contract_machines.dynamics import resolve_inputs
from contract_machines.exceptions import ContractError
from contract_machines.machines import format_path
from contract_machines.reporting import render
from contract_machines.scenarios import create_tank_cascade_scenario, create_cruise_control_scenario
from contract_machines.visualization import draw_wiring_diagram, plot_failure_timeline


def build_scenario(factory):
    """Create a scenario, printing any composition warnings"""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        scenario = factory()
    for w in caught:
        print(f"  ⚠ {w.message}")
    return scenario


def run_scenario(scenario, output_dir: str):
    """
    Run a single scenario: static checks, simulation, monitoring, outputs.

    Args:
        scenario: The scenario to run
        output_dir: Directory for output files
    """

    print(f"\n{'='*80}")
    print(f"SCENARIO: {scenario.name}")
    print(f"{'='*80}")
    print(f"Description: {scenario.description}")
    print()

    print(scenario.diagram.detailed_str())
    print()

    print("Composite contract:")
    print(f"  {scenario.machine.contract}")
    print()

    print("Checking wire compatibility...")
    checker = CompatibilityChecker(scenario.diagram)
    compatibility = checker.check([m.contract for m in scenario.machine.parts])
    print(compatibility)
    print()

    print(f"Solving dynamics over t ∈ {scenario.tspan}...")
    trajectory = scenario.solve()
    print(f"  {trajectory}")
    print()

    print("Contract at t=0:")
    t0 = trajectory.t[0]
    print(render(scenario.machine.evaluate(trajectory(t0), resolve_inputs(scenario.inputs, t0), scenario.params, t0)))
    print()

    print("Monitoring contracts along the trajectory...")
    report = scenario.check(trajectory)
    print(render(report))
    print()
    print(report.summary())

    if report.is_clean() == scenario.expect_violations:
        expected = "violations" if scenario.expect_violations else "no violations"
        print(f"⚠ Expected {expected}")
    print()

    print("Generating visualizations...")
    figures_dir = os.path.join(output_dir, 'figures')
    os.makedirs(figures_dir, exist_ok=True)

    draw_wiring_diagram(
        scenario.diagram,
        os.path.join(figures_dir, f'diagram_{scenario.name}.png'),
        report=report,
        title=f"Wiring Diagram: {scenario.name}"
    )
    plot_failure_timeline(
        report,
        os.path.join(figures_dir, f'failures_{scenario.name}.png'),
        title=f"Contract Failures: {scenario.name}"
    )
    print()

    print("Generating text report...")
    report_path = os.path.join(output_dir, f'contract_report_{scenario.name}.txt')
    _generate_text_report(report_path, scenario, compatibility, report)
    print(f"Report saved to {report_path}")


def _generate_text_report(report_path: str, scenario, compatibility, report):
    """Generate detailed text report"""

    with open(report_path, 'w') as f:
        f.write("="*80 + "\n")
        f.write("CONTRACT MONITORING REPORT\n")
        f.write("="*80 + "\n")
        f.write(f"Scenario: {scenario.name}\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write("\n")

        f.write("DESCRIPTION\n")
        f.write("-"*80 + "\n")
        f.write(f"{scenario.description}\n")
        f.write("\n")

        f.write("BOX CONTRACTS\n")
        f.write("-"*80 + "\n")
        for box, part in zip(scenario.diagram.boxes, scenario.machine.parts):
            f.write(f"\n{box.name}:\n")
            f.write(part.contract.detailed_str(box.input_ports, box.output_ports))
            f.write("\n")
        f.write("\n")

        f.write("COMPOSITE CONTRACT\n")
        f.write("-"*80 + "\n")
        f.write(f"{scenario.machine.contract}\n\n")

        f.write("WIRE COMPATIBILITY\n")
        f.write("-"*80 + "\n")
        f.write(str(compatibility))
        f.write("\n\n")

        f.write("FAILURE INTERVALS\n")
        f.write("-"*80 + "\n")
        f.write(render(report))
        f.write("\n\n")
        for path, direction, port, ranges in report.violations():
            spans = ", ".join(f"[{a:g}, {b:g}]" for a, b in ranges)
            f.write(f"  {format_path(path):30s} {direction:6s} {port:12s} {spans}\n")
        f.write("\n")
        f.write(report.summary())
        f.write("\n")


def main():
    """Main execution function"""

    print("="*80)
    print("CONTRACT MACHINES - DYNAMIC CONTRACT MONITORING")
    print("="*80)
    print()

    output_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'output')
    os.makedirs(output_dir, exist_ok=True)

    print("Creating scenarios...")
    scenarios = []
    for factory in (create_tank_cascade_scenario, create_cruise_control_scenario):
        try:
            scenarios.append(build_scenario(factory))
        except ContractError as e:
            print(f"ERROR composing {factory.__name__}: {e}")
    print(f"Created {len(scenarios)} scenario(s)\n")

    for scenario in scenarios:
        run_scenario(scenario, output_dir)

    print("\n" + "="*80)
    print("ALL SCENARIOS COMPLETE")
    print("="*80)
    print(f"\nOutputs saved to: {output_dir}")
    print(f"  - Text reports: {output_dir}/contract_report_*.txt")
    print(f"  - Figures: {output_dir}/figures/")
    print()


if __name__ == "__main__":
    main()
