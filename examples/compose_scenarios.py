#!/usr/bin/env python3
"""
Example script demonstrating how to use the scenario composer
"""
import sys
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.main import ScenarioComposer
from src.config import load_generator_config, GeneratorConfig
from src.scenario_engine import EnvironmentBrokenError


def show_exploratory(config):
    """Print the exploratory matrix for this machine"""
    print("=" * 80)
    print("Exploratory Scenarios")
    print("=" * 80)

    composer = ScenarioComposer(config)
    scenarios = composer.exploratory_scenarios()

    for scenario in scenarios:
        deferred = ", ".join(axis.name for axis in scenario.cluster.axes())
        print(f"{scenario.name}")
        print(f"  Randomized at startup: {deferred or 'nothing'}")

    print(f"\nTotal: {len(scenarios)}")
    return scenarios


def show_regression(config):
    """Print the regression list for the installed server"""
    print("=" * 80)
    print("Regression Scenarios")
    print("=" * 80)

    composer = ScenarioComposer(config)
    try:
        scenarios = composer.regression_scenarios()
    except EnvironmentBrokenError as e:
        print(f"\nCannot build regression list: {e}")
        return None

    for scenario in scenarios:
        fault = scenario.fault.name if scenario.fault else "none"
        print(f"{scenario.name}: {scenario.workload.name}/{scenario.profile.name}, fault {fault}")

    print(f"\nTotal: {len(scenarios)}")
    return scenarios


def resolve(config, name, seed):
    """Resolve one scenario into a concrete descriptor"""
    composer = ScenarioComposer(config)
    scenario = composer.find_scenario(name)
    resolved = scenario.cluster.resolve(seed=seed)

    print(f"Scenario: {scenario.name}")
    print(f"Seed: {resolved.seed}")
    for axis, groups in resolved.choices.items():
        print(f"  {axis} -> {', '.join(groups)}")
    print(f"\n{resolved.descriptor}")
    return resolved


def main():
    parser = argparse.ArgumentParser(
        description="Robustness scenario composer examples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python compose_scenarios.py exploratory
  python compose_scenarios.py regression --config config.yaml
  python compose_scenarios.py resolve KVPut/HighTraffic/ClusterOfSize3 --seed 7
        """
    )
    parser.add_argument('--config', type=str, help='Path to generator configuration')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')
    subparsers.add_parser('exploratory', help='Show exploratory scenarios')
    subparsers.add_parser('regression', help='Show regression scenarios')
    resolve_parser = subparsers.add_parser('resolve', help='Resolve a scenario')
    resolve_parser.add_argument('name', help='Scenario name')
    resolve_parser.add_argument('--seed', type=int, help='Seed for reproducibility')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    config = load_generator_config(args.config) if args.config else GeneratorConfig()

    if args.command == 'exploratory':
        show_exploratory(config)
    elif args.command == 'regression':
        return 0 if show_regression(config) is not None else 2
    elif args.command == 'resolve':
        resolve(config, args.name, args.seed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
