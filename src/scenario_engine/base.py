"""
Base classes for scenario generators
"""
import logging
from abc import ABC
from typing import Callable, List, Optional
from ..interfaces import IScenarioGenerator, ICapabilityProbe
from ..models import BinaryPaths
from .error_handler import ErrorHandler, CapabilityUnavailable
from .options import ClusterOption, with_binaries, with_base_data_dir

logger = logging.getLogger(__name__)


class BaseScenarioGenerator(IScenarioGenerator, ABC):
    """Base implementation for scenario generators with shared probe handling"""

    def __init__(
        self,
        probe: ICapabilityProbe,
        binaries: Optional[BinaryPaths] = None,
        base_data_dir: Optional[str] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.probe = probe
        self.binaries = binaries or BinaryPaths()
        self.base_data_dir = base_data_dir
        self.error_handler = error_handler or ErrorHandler()

    def _probe(self, capability: str, check: Callable[[], bool]) -> bool:
        """Run a capability check, a gap narrows generation instead of aborting it"""
        try:
            available = check()
        except CapabilityUnavailable as e:
            self.error_handler.capability_gap(e, component=type(self).__name__)
            return False
        logger.info(f"Capability {capability}: {'available' if available else 'unavailable'}")
        return available

    def _environment_options(self) -> List[ClusterOption]:
        """Options pointing every descriptor at this environment's binaries and data dir"""
        options = [with_binaries(self.binaries.server, self.binaries.last_release)]
        if self.base_data_dir:
            options.append(with_base_data_dir(self.base_data_dir))
        return options
