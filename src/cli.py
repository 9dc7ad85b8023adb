#!/usr/bin/env python3
"""
Command-line interface for the robustness scenario composer
Provides commands for listing, exporting and resolving generated scenarios.
"""
import sys
import argparse
import traceback
import logging
from dataclasses import asdict
from typing import List
from .config import GeneratorConfig, load_generator_config
from .main import ScenarioComposer
from .models import Scenario
from .scenario_engine import ScenarioExporter, EnvironmentBrokenError
from .scenario_engine.error_handler import ErrorCategory

EXIT_ENVIRONMENT_BROKEN = 2


class ScenarioCLI:
    """Command-line interface for the scenario composer"""

    def __init__(self):
        self.config = GeneratorConfig()

    def _load_config(self, args) -> bool:
        if not getattr(args, 'config', None):
            return True
        try:
            self.config = load_generator_config(args.config)
            print(f"Loaded configuration from {args.config}")
            return True
        except Exception as e:
            print(f"Error: Failed to load config file: {e}")
            print(f"\nConfig file must be YAML (.yaml, .yml) or JSON (.json)")
            print(f"Example: kv-scenarios list --config config.yaml")
            return False

    def list_scenarios(self, args) -> int:
        """Generate scenarios for the selected mode and print or save them"""
        self._print_header(f"Scenarios: {args.mode}")

        if not self._load_config(args):
            return 1

        composer = ScenarioComposer(self.config)
        if args.mode == 'exploratory':
            scenarios = composer.exploratory_scenarios()
        elif args.mode == 'regression':
            scenarios = composer.regression_scenarios()
        else:
            scenarios = composer.all_scenarios()

        for scenario in scenarios:
            if args.verbose:
                self._print_scenario_details(scenario)
            else:
                print(f"  {scenario.name}")

        print(f"\nTotal Scenarios: {len(scenarios)}")

        if args.verbose:
            gaps = [e for e in composer.error_handler.error_history
                    if e.category == ErrorCategory.CAPABILITY_PROBE]
            if gaps:
                print(f"Narrowed by {len(gaps)} capability gap(s):")
                for error in gaps:
                    print(f"  • {error.message}")

        if args.output:
            ScenarioExporter.save_scenarios(scenarios, args.output, args.format)
            print(f"\nScenarios saved to {args.output}")

        return 0

    def resolve_scenario(self, args) -> int:
        """Resolve one scenario's randomizable options and print the descriptor"""
        self._print_header(f"Resolve: {args.name}")

        if not self._load_config(args):
            return 1

        composer = ScenarioComposer(self.config)
        try:
            scenario = composer.find_scenario(args.name)
        except KeyError:
            print(f"Error: No scenario named '{args.name}'")
            print(f"\nList available scenarios with: kv-scenarios list")
            return 1

        resolved = scenario.cluster.resolve(seed=args.seed)
        print(f"Seed: {resolved.seed} (use to reproduce)")
        for axis, groups in resolved.choices.items():
            print(f"  {axis}: {', '.join(groups)}")

        print("\nCluster Descriptor:")
        for key, value in asdict(resolved.descriptor).items():
            if hasattr(value, 'value'):
                value = value.value
            print(f"  {key}: {value}")
        return 0

    def _print_header(self, title: str):
        """Print formatted header"""
        print()
        print("=" * 80)
        print(title)
        print("=" * 80)
        print()

    def _print_scenario_details(self, scenario: Scenario):
        fault = scenario.fault.name if scenario.fault else "none"
        print(f"{scenario.name}")
        print(f"  Workload: {scenario.workload.name} @ {scenario.profile.name}")
        print(f"  Fault: {fault}")
        if scenario.watch.request_progress:
            print(f"  Watch: request progress")
        print(f"  Options: {', '.join(scenario.cluster.option_names())}")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog='kv-scenarios',
        description='Robustness scenario composer - enumerate test scenarios for a replicated key-value store',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List every scenario for this environment
  kv-scenarios list

  # Only the regression reproductions
  kv-scenarios list --mode regression

  # Export exploratory scenarios for the harness
  kv-scenarios list --mode exploratory --output scenarios.yaml --format yaml

  # Show the cluster a scenario resolves to for a given seed
  kv-scenarios resolve KVPut/HighTraffic/ClusterOfSize3 --seed 42
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version='KV Robustness Scenarios 0.1.0'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    list_parser = subparsers.add_parser(
        'list',
        help='Generate and list scenarios'
    )
    list_parser.add_argument(
        '--mode',
        choices=['exploratory', 'regression', 'all'],
        default='all',
        help='Which generator to run (default: all)'
    )
    list_parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file (YAML or JSON)'
    )
    list_parser.add_argument(
        '--output',
        type=str,
        help='Path to save scenario recipes'
    )
    list_parser.add_argument(
        '--format',
        choices=['json', 'yaml'],
        default='yaml',
        help='Output format for scenario recipes (default: yaml)'
    )
    list_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    resolve_parser = subparsers.add_parser(
        'resolve',
        help='Resolve one scenario into a concrete cluster descriptor'
    )
    resolve_parser.add_argument(
        'name',
        help='Scenario name, e.g. KVPut/HighTraffic/ClusterOfSize1'
    )
    resolve_parser.add_argument(
        '--seed',
        type=int,
        help='Seed for reproducibility'
    )
    resolve_parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file (YAML or JSON)'
    )
    resolve_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def main(argv: List[str] = None):
    """Main entry point for CLI"""

    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)-5s | %(filename)s:%(lineno)-3d | %(message)s',
        handlers=[logging.StreamHandler()]
    )

    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        print("Error: No command specified\n")
        parser.print_help()
        print("\nCommon commands:")
        print("  kv-scenarios list                        # List all scenarios")
        print("  kv-scenarios list --mode regression      # List regression scenarios")
        print("  kv-scenarios resolve <name> --seed 42    # Resolve one scenario")
        return 1

    cli = ScenarioCLI()

    try:
        if args.command == 'list':
            return cli.list_scenarios(args)
        elif args.command == 'resolve':
            return cli.resolve_scenario(args)
    except KeyboardInterrupt:
        print("\n\nScenario generation was interrupted by user")
        return 130
    except EnvironmentBrokenError as e:
        print(f"\nFatal: broken test environment: {e}")
        return EXIT_ENVIRONMENT_BROKEN
    except Exception as e:
        print(f"\nUnexpected error: {e}")
        if getattr(args, 'verbose', False):
            traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
