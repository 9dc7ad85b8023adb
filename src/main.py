"""
Main entry point for the robustness scenario composer
"""
from typing import List, Optional
from .config import GeneratorConfig
from .interfaces import ICapabilityProbe, IBinaryIntrospector
from .models import Scenario
from .environment import LocalCapabilityProbe, BinaryIntrospector
from .scenario_engine import ExploratoryGenerator, RegressionGenerator, ErrorHandler


class ScenarioComposer:
    """Wires the environment probes into both scenario generators"""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        probe: Optional[ICapabilityProbe] = None,
        introspector: Optional[IBinaryIntrospector] = None
    ):
        self.config = config or GeneratorConfig()
        self.introspector = introspector or BinaryIntrospector()
        self.probe = probe or LocalCapabilityProbe(self.config.binaries, self.introspector)
        self.error_handler = ErrorHandler()

    def exploratory_scenarios(self) -> List[Scenario]:
        generator = ExploratoryGenerator(
            self.probe,
            binaries=self.config.binaries,
            workload_profiles=self.config.workload_profile_registry(),
            lazyfs_max_minimal_qps=self.config.lazyfs_max_minimal_qps,
            base_data_dir=self.config.base_data_dir,
            error_handler=self.error_handler
        )
        return generator.generate()

    def regression_scenarios(self) -> List[Scenario]:
        """
        Regression scenarios for the installed server.

        Raises EnvironmentBrokenError when the server version cannot be determined.
        """
        generator = RegressionGenerator(
            self.probe,
            self.introspector,
            binaries=self.config.binaries,
            base_data_dir=self.config.base_data_dir,
            error_handler=self.error_handler
        )
        return generator.generate()

    def all_scenarios(self) -> List[Scenario]:
        return self.exploratory_scenarios() + self.regression_scenarios()

    def find_scenario(self, name: str) -> Scenario:
        """Look a scenario up by name across both modes, raises KeyError if absent"""
        for scenario in self.exploratory_scenarios():
            if scenario.name == name:
                return scenario
        for scenario in self.regression_scenarios():
            if scenario.name == name:
                return scenario
        raise KeyError(name)
