"""
Scenario Assembler - pairs workloads with cluster recipes under hierarchical names
"""
from typing import List, Optional, Set
from ..models import Scenario, WorkloadProfile, Fault, WatchConfig
from .descriptor_builder import DescriptorBuilder
from .error_handler import DuplicateScenarioError

NAME_SEPARATOR = "/"


def scenario_name(*segments: str) -> str:
    """Join composition path segments into a scenario name"""
    if not segments:
        raise ValueError("Scenario name needs at least one segment")
    for segment in segments:
        if not segment:
            raise ValueError(f"Empty segment in scenario path {segments!r}")
        if NAME_SEPARATOR in segment:
            raise ValueError(f"Segment '{segment}' must not contain '{NAME_SEPARATOR}'")
    return NAME_SEPARATOR.join(segments)


class ScenarioAssembler:
    """Collects scenarios for one generation call, keeping order and rejecting name collisions"""

    def __init__(self):
        self._scenarios: List[Scenario] = []
        self._names: Set[str] = set()

    def add(
        self,
        path: List[str],
        workload_profile: WorkloadProfile,
        cluster: DescriptorBuilder,
        fault: Optional[Fault] = None,
        watch: Optional[WatchConfig] = None
    ) -> Scenario:
        name = scenario_name(*path)
        if name in self._names:
            raise DuplicateScenarioError(f"Scenario '{name}' generated twice")

        scenario = Scenario(
            name=name,
            workload=workload_profile.workload,
            profile=workload_profile.profile,
            cluster=cluster,
            fault=fault,
            watch=watch or WatchConfig()
        )
        self._names.add(name)
        self._scenarios.append(scenario)
        return scenario

    def scenarios(self) -> List[Scenario]:
        return list(self._scenarios)

    def __len__(self):
        return len(self._scenarios)
