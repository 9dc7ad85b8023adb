"""
Export Utilities - serialize generated scenarios for the harness
"""
import json
import yaml
from pathlib import Path
from typing import Union, List, Dict, Any
from ..models import Scenario
from .options import Applier, ClusterOption, RandomizableAxis, SubsetAxis


class ScenarioExporter:
    """Utility class for writing scenario recipes to YAML or JSON"""

    @staticmethod
    def _serialize_option(option: Applier) -> Union[str, Dict[str, Any]]:
        """Plain options serialize to their name, axes to their alternatives."""
        if isinstance(option, ClusterOption):
            return option.name

        if isinstance(option, RandomizableAxis):
            return {
                'axis': option.name,
                'choose_one': [
                    {
                        'group': group.name,
                        'options': [ScenarioExporter._serialize_option(o) for o in group.options]
                    }
                    for group in option.groups
                ]
            }

        if isinstance(option, SubsetAxis):
            return {
                'axis': option.name,
                'choose_subset': [ScenarioExporter._serialize_option(o) for o in option.options]
            }

        raise TypeError(f"Unsupported option type: {type(option).__name__}")

    @staticmethod
    def scenario_to_dict(scenario: Scenario) -> Dict[str, Any]:
        return {
            'name': scenario.name,
            'workload': scenario.workload.name,
            'profile': {
                'name': scenario.profile.name,
                'minimal_qps': scenario.profile.minimal_qps,
                'maximal_qps': scenario.profile.maximal_qps,
                'client_count': scenario.profile.client_count,
                'max_non_unique_request_concurrency': scenario.profile.max_non_unique_request_concurrency
            },
            'fault': {
                'name': scenario.fault.name,
                'type': scenario.fault.fault_type.value
            } if scenario.fault else None,
            'watch': {
                'request_progress': scenario.watch.request_progress
            },
            'cluster': {
                'deferred': scenario.cluster.is_deferred,
                'options': [ScenarioExporter._serialize_option(o) for o in scenario.cluster.options]
            }
        }

    @staticmethod
    def save_scenarios(scenarios: List[Scenario], file_path: Union[str, Path], format: str = 'yaml') -> None:
        """Save scenario recipes to a file in the given format ('yaml' or 'json')."""
        if format not in ('json', 'yaml'):
            raise ValueError(f"Unsupported export format: {format}")

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'total_scenarios': len(scenarios),
            'scenarios': [ScenarioExporter.scenario_to_dict(s) for s in scenarios]
        }

        with open(file_path, 'w') as f:
            if format == 'json':
                json.dump(data, f, indent=2)
            else:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
