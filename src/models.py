"""
Core data models for the robustness scenario composer
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from .scenario_engine.descriptor_builder import DescriptorBuilder


@dataclass(frozen=True)
class Workload:
    """Identity of a traffic generator run against the cluster"""
    name: str


@dataclass(frozen=True)
class LoadProfile:
    """Load intensity a workload is driven at"""
    name: str
    minimal_qps: float
    maximal_qps: float
    client_count: int = 8
    max_non_unique_request_concurrency: int = 3


@dataclass(frozen=True)
class WorkloadProfile:
    """A (workload, load profile) pair from the fixed registry"""
    workload: Workload
    profile: LoadProfile


class ClusterVersion(Enum):
    """Which server release each member of the cluster runs"""
    CURRENT = "current"
    MINORITY_LAST = "minority_last"  # Last member runs the previous release
    QUORUM_LAST = "quorum_last"  # All but the last member run the previous release
    LAST = "last"


@dataclass
class ClusterDescriptor:
    """Everything the process manager needs to materialize a test cluster"""
    cluster_size: int = 3
    tick_ms: int = 100
    election_ms: int = 1000
    snapshot_count: int = 10000
    snapshot_catchup_entries: Optional[int] = None  # None keeps the server default
    compaction_batch_limit: Optional[int] = None
    failpoints_enabled: bool = False
    lazyfs_enabled: bool = False
    watch_process_notify_interval: Optional[float] = None  # Seconds
    is_peer_tls: bool = False
    peer_proxy: bool = False
    version: ClusterVersion = ClusterVersion.CURRENT
    initial_leader_index: Optional[int] = None
    server_binary: str = "bin/kv-server"
    last_release_binary: str = "bin/kv-server-last-release"
    base_port: int = 20000
    base_data_dir: str = "/tmp/kv-robustness"
    member_overrides: Dict[int, Dict[str, Any]] = field(default_factory=dict)

    def member_binary(self, index: int) -> str:
        """Binary the member at the given position is started from."""
        if not 0 <= index < self.cluster_size:
            raise IndexError(f"Member index {index} out of range for cluster of size {self.cluster_size}")

        last_member = index == self.cluster_size - 1
        if self.version == ClusterVersion.CURRENT:
            return self.server_binary
        if self.version == ClusterVersion.MINORITY_LAST:
            return self.last_release_binary if last_member else self.server_binary
        if self.version == ClusterVersion.QUORUM_LAST:
            return self.server_binary if last_member else self.last_release_binary
        return self.last_release_binary

    def validate(self) -> bool:
        """
        Check cross-field consistency, raises ValueError if invalid.

        Called by the harness at instantiation time; building a descriptor never validates.
        """
        if self.cluster_size < 1:
            raise ValueError(f"cluster_size must be at least 1, got {self.cluster_size}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.election_ms < 5 * self.tick_ms:
            raise ValueError(f"election_ms ({self.election_ms}) must be at least 5 ticks ({5 * self.tick_ms})")
        if self.snapshot_count <= 0:
            raise ValueError(f"snapshot_count must be positive, got {self.snapshot_count}")
        if self.compaction_batch_limit is not None and self.compaction_batch_limit <= 0:
            raise ValueError(f"compaction_batch_limit must be positive, got {self.compaction_batch_limit}")
        if self.initial_leader_index is not None and not 0 <= self.initial_leader_index < self.cluster_size:
            raise ValueError(f"initial_leader_index {self.initial_leader_index} out of range "
                             f"for cluster of size {self.cluster_size}")
        if self.version in (ClusterVersion.MINORITY_LAST, ClusterVersion.QUORUM_LAST) and self.cluster_size < 2:
            raise ValueError(f"Mixed version '{self.version.value}' requires at least 2 members")
        for index in self.member_overrides:
            if not 0 <= index < self.cluster_size:
                raise ValueError(f"Override for member {index} out of range for cluster of size {self.cluster_size}")
        return True


class FaultType(Enum):
    """Mechanisms a fault can be injected with"""
    FAILPOINT_PANIC = "failpoint_panic"
    PROCESS_KILL = "process_kill"
    NETWORK_BLACKHOLE = "network_blackhole"


@dataclass(frozen=True)
class Fault:
    """Fault armed while a scenario runs"""
    name: str
    fault_type: FaultType


@dataclass(frozen=True)
class WatchConfig:
    """Auxiliary watch behaviour toggled per scenario"""
    request_progress: bool = False


@dataclass(frozen=True)
class Scenario:
    """Fully composed test configuration handed to the harness"""
    name: str
    workload: Workload
    profile: LoadProfile
    cluster: 'DescriptorBuilder'
    fault: Optional[Fault] = None
    watch: WatchConfig = field(default_factory=WatchConfig)


@dataclass
class BinaryPaths:
    """Locations of binaries the environment probes look at"""
    server: str = "bin/kv-server"
    last_release: str = "bin/kv-server-last-release"
    lazyfs: str = "bin/lazyfs"
