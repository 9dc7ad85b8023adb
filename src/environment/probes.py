"""
Capability probes for optional environment features
"""
import os
import logging
from typing import Dict, Optional
from packaging.version import Version
from ..interfaces import ICapabilityProbe, IBinaryIntrospector
from ..models import BinaryPaths
from ..scenario_engine.error_handler import CapabilityUnavailable, EnvironmentBrokenError
from .binary import BinaryIntrospector

logger = logging.getLogger(__name__)

# Minimum server release accepting each tunable
TUNABLE_MIN_VERSIONS: Dict[str, Version] = {
    "snapshot-catchup-entries": Version("3.5.14"),
}

FUSE_DEVICE = "/dev/fuse"


class LocalCapabilityProbe(ICapabilityProbe):
    """
    Probes the local machine.

    A probe that cannot establish its answer raises CapabilityUnavailable with
    the reason, generators treat that the same as a negative answer.
    """

    def __init__(self, binaries: Optional[BinaryPaths] = None, introspector: Optional[IBinaryIntrospector] = None):
        self.binaries = binaries or BinaryPaths()
        self.introspector = introspector or BinaryIntrospector()

    def supports_lazyfs(self) -> bool:
        if not self.exists(self.binaries.lazyfs):
            raise CapabilityUnavailable("lazyfs", f"binary not found at {self.binaries.lazyfs}")
        if not self.exists(FUSE_DEVICE):
            raise CapabilityUnavailable("lazyfs", f"{FUSE_DEVICE} not present")
        return True

    def supports_tunable(self, name: str) -> bool:
        if name not in TUNABLE_MIN_VERSIONS:
            raise CapabilityUnavailable(name, "no known minimum release for tunable")

        try:
            version = self.introspector.get_installed_version(self.binaries.server)
        except EnvironmentBrokenError as e:
            raise CapabilityUnavailable(name, str(e)) from e

        supported = version >= TUNABLE_MIN_VERSIONS[name]
        logger.debug(f"Tunable {name} {'supported' if supported else 'unsupported'} by {version}")
        return supported

    def exists(self, path: str) -> bool:
        return os.path.exists(path)
