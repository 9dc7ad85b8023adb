"""
Regression Generator - fixed reproductions of previously fixed defects
"""
import logging
from typing import List, Optional, Tuple
from ..interfaces import ICapabilityProbe, IBinaryIntrospector
from ..models import Scenario, BinaryPaths
from .base import BaseScenarioGenerator
from .assembler import ScenarioAssembler
from .descriptor_builder import DescriptorBuilder
from .error_handler import ErrorHandler, EnvironmentBrokenError
from .registry import RegressionCase, DEFAULT_REGRESSION_CASES

logger = logging.getLogger(__name__)


class RegressionGenerator(BaseScenarioGenerator):
    """Emits the regression list, version gated against the installed server binary"""

    def __init__(
        self,
        probe: ICapabilityProbe,
        introspector: IBinaryIntrospector,
        binaries: Optional[BinaryPaths] = None,
        cases: Tuple[RegressionCase, ...] = DEFAULT_REGRESSION_CASES,
        base_data_dir: Optional[str] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        super().__init__(probe, binaries, base_data_dir, error_handler)
        self.introspector = introspector
        self.cases = tuple(cases)

    def generate(self) -> List[Scenario]:
        """Build the regression scenarios, raises EnvironmentBrokenError if the server version is unknown"""
        try:
            version = self.introspector.get_installed_version(self.binaries.server)
        except EnvironmentBrokenError as e:
            self.error_handler.environment_broken(e, component=type(self).__name__)
            raise
        logger.info(f"Installed server version: {version}")

        assembler = ScenarioAssembler()
        for case in self.cases:
            if case.min_version is not None and version < case.min_version:
                logger.info(f"Skipping {case.name}: requires version >= {case.min_version}, installed {version}")
                continue

            options = self._environment_options()
            options.extend(case.options)
            for tunable, option in case.tunable_options:
                if self._probe(tunable, lambda tunable=tunable: self.probe.supports_tunable(tunable)):
                    options.append(option)

            assembler.add(
                [case.name], case.workload_profile, DescriptorBuilder(tuple(options)),
                fault=case.fault, watch=case.watch
            )

        logger.info(f"Generated {len(assembler)} regression scenarios")
        return assembler.scenarios()
