"""
Fixed registries of workloads, load profiles, faults and regression cases
"""
from dataclasses import dataclass
from typing import Tuple, Optional, Iterable, Dict
from packaging.version import Version
from ..models import Workload, LoadProfile, WorkloadProfile, Fault, FaultType, WatchConfig
from .options import (
    Applier, ClusterOption, with_cluster_size, with_failpoints_enabled, with_snapshot_count,
    with_peer_proxy, with_peer_tls, with_snapshot_catchup_entries
)

KV_PUT = Workload("KVPut")
KV_PUT_DELETE_LEASE = Workload("KVPutDeleteLease")
KUBERNETES = Workload("Kubernetes")

LOW_TRAFFIC = LoadProfile("LowTraffic", minimal_qps=100, maximal_qps=200)
HIGH_TRAFFIC = LoadProfile("HighTraffic", minimal_qps=200, maximal_qps=1000)

WORKLOADS: Dict[str, Workload] = {w.name: w for w in (KV_PUT, KV_PUT_DELETE_LEASE, KUBERNETES)}
LOAD_PROFILES: Dict[str, LoadProfile] = {p.name: p for p in (LOW_TRAFFIC, HIGH_TRAFFIC)}

RAFT_BEFORE_SAVE_PANIC = Fault("raftBeforeSave=panic", FaultType.FAILPOINT_PANIC)
DEFRAG_BEFORE_COPY_PANIC = Fault("defragBeforeCopy=panic", FaultType.FAILPOINT_PANIC)
KILL = Fault("Kill", FaultType.PROCESS_KILL)
BLACKHOLE_UNTIL_SNAPSHOT = Fault("BlackholeUntilSnapshot", FaultType.NETWORK_BLACKHOLE)

SNAPSHOT_CATCHUP_ENTRIES = "snapshot-catchup-entries"


def workload_profiles(pairs: Iterable[WorkloadProfile]) -> Tuple[WorkloadProfile, ...]:
    """Freeze a workload profile registry, rejecting entries that repeat both fields"""
    registry = tuple(pairs)
    seen = set()
    for entry in registry:
        key = (entry.workload.name, entry.profile.name)
        if key in seen:
            raise ValueError(f"Duplicate workload profile: {key[0]}/{key[1]}")
        seen.add(key)
    return registry


def select_workload_profiles(names: Iterable[str]) -> Tuple[WorkloadProfile, ...]:
    """Build a registry from '<workload>/<profile>' names of known entries"""
    pairs = []
    for name in names:
        workload_name, _, profile_name = name.partition("/")
        if workload_name not in WORKLOADS:
            raise ValueError(f"Unknown workload '{workload_name}' in '{name}'")
        if profile_name not in LOAD_PROFILES:
            raise ValueError(f"Unknown load profile '{profile_name}' in '{name}'")
        pairs.append(WorkloadProfile(WORKLOADS[workload_name], LOAD_PROFILES[profile_name]))
    return workload_profiles(pairs)


DEFAULT_WORKLOAD_PROFILES = workload_profiles([
    WorkloadProfile(KV_PUT, HIGH_TRAFFIC),
    WorkloadProfile(KV_PUT_DELETE_LEASE, LOW_TRAFFIC),
    WorkloadProfile(KUBERNETES, HIGH_TRAFFIC),
    WorkloadProfile(KUBERNETES, LOW_TRAFFIC),
])


@dataclass(frozen=True)
class RegressionCase:
    """Hand-curated reproduction of a previously fixed defect"""
    name: str
    workload_profile: WorkloadProfile
    options: Tuple[Applier, ...]
    fault: Optional[Fault] = None
    watch: WatchConfig = WatchConfig()
    min_version: Optional[Version] = None
    # Options added only when the installed binary supports the named tunable
    tunable_options: Tuple[Tuple[str, ClusterOption], ...] = ()


DEFAULT_REGRESSION_CASES: Tuple[RegressionCase, ...] = (
    RegressionCase(
        name="Issue14370",
        fault=RAFT_BEFORE_SAVE_PANIC,
        workload_profile=WorkloadProfile(KV_PUT_DELETE_LEASE, LOW_TRAFFIC),
        options=(with_cluster_size(1), with_failpoints_enabled(True)),
    ),
    RegressionCase(
        name="Issue14685",
        fault=DEFRAG_BEFORE_COPY_PANIC,
        workload_profile=WorkloadProfile(KV_PUT_DELETE_LEASE, LOW_TRAFFIC),
        options=(with_cluster_size(1), with_failpoints_enabled(True)),
    ),
    RegressionCase(
        name="Issue13766",
        fault=KILL,
        workload_profile=WorkloadProfile(KV_PUT, HIGH_TRAFFIC),
        options=(with_snapshot_count(100),),
    ),
    RegressionCase(
        name="Issue15220",
        watch=WatchConfig(request_progress=True),
        workload_profile=WorkloadProfile(KV_PUT_DELETE_LEASE, LOW_TRAFFIC),
        options=(with_cluster_size(1),),
    ),
    RegressionCase(
        name="Issue15271",
        fault=BLACKHOLE_UNTIL_SNAPSHOT,
        workload_profile=WorkloadProfile(KV_PUT, HIGH_TRAFFIC),
        options=(with_snapshot_count(100), with_peer_proxy(True), with_peer_tls(True)),
        min_version=Version("3.5.0"),
        tunable_options=((SNAPSHOT_CATCHUP_ENTRIES, with_snapshot_catchup_entries(100)),),
    ),
)
