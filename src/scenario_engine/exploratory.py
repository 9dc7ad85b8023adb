"""
Exploratory Generator - broad workload x profile x topology x feature matrix
"""
import logging
from typing import List, Optional, Tuple
from ..interfaces import ICapabilityProbe
from ..models import Scenario, WorkloadProfile, ClusterVersion, BinaryPaths
from .base import BaseScenarioGenerator
from .assembler import ScenarioAssembler
from .descriptor_builder import DescriptorBuilder
from .error_handler import ErrorHandler
from .options import (
    Applier, OptionGroup, RandomizableAxis, option_groups, subset_options,
    with_tick_ms, with_election_ms, with_snapshot_count, with_failpoints_enabled,
    with_compaction_batch_limit, with_watch_process_notify_interval, with_snapshot_catchup_entries,
    with_cluster_size, with_lazyfs_enabled, with_peer_tls, with_peer_proxy, with_version,
    with_initial_leader_index
)
from .registry import DEFAULT_WORKLOAD_PROFILES, SNAPSHOT_CATCHUP_ENTRIES

logger = logging.getLogger(__name__)

# LazyFS costs a lot of CPU, only profiles that can live with a lower QPS floor get it
LAZYFS_MAX_MINIMAL_QPS = 100

VERSION_MIX_AXIS = "version-mix"
TIMING_AXIS = "timing"


def timing_axis() -> RandomizableAxis:
    return option_groups(
        TIMING_AXIS,
        OptionGroup((with_tick_ms(29), with_election_ms(271)), label="tick-29ms"),
        OptionGroup((with_tick_ms(101), with_election_ms(521)), label="tick-101ms"),
        OptionGroup((with_tick_ms(100), with_election_ms(2000)), label="tick-100ms-election-2s"),
    )


def version_mix_axis() -> RandomizableAxis:
    """Steady state six times out of ten, each leader/version skew once"""
    all_current = OptionGroup((with_version(ClusterVersion.CURRENT),), label="current")
    return option_groups(
        VERSION_MIX_AXIS,
        *([all_current] * 6),
        OptionGroup((with_version(ClusterVersion.MINORITY_LAST), with_initial_leader_index(0)),
                    label="minority-last-leader-current"),
        OptionGroup((with_version(ClusterVersion.MINORITY_LAST), with_initial_leader_index(2)),
                    label="minority-last-leader-last"),
        OptionGroup((with_version(ClusterVersion.QUORUM_LAST), with_initial_leader_index(0)),
                    label="quorum-last-leader-last"),
        OptionGroup((with_version(ClusterVersion.QUORUM_LAST), with_initial_leader_index(2)),
                    label="quorum-last-leader-current"),
    )


class ExploratoryGenerator(BaseScenarioGenerator):
    """Generates the exploratory scenario matrix for the current environment"""

    def __init__(
        self,
        probe: ICapabilityProbe,
        binaries: Optional[BinaryPaths] = None,
        workload_profiles: Tuple[WorkloadProfile, ...] = DEFAULT_WORKLOAD_PROFILES,
        lazyfs_max_minimal_qps: float = LAZYFS_MAX_MINIMAL_QPS,
        base_data_dir: Optional[str] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        super().__init__(probe, binaries, base_data_dir, error_handler)
        self.workload_profiles = tuple(workload_profiles)
        self.lazyfs_max_minimal_qps = lazyfs_max_minimal_qps

    def generate(self) -> List[Scenario]:
        enable_lazyfs = self._probe("lazyfs", self.probe.supports_lazyfs)
        catchup_entries = self._probe(SNAPSHOT_CATCHUP_ENTRIES,
                                      lambda: self.probe.supports_tunable(SNAPSHOT_CATCHUP_ENTRIES))
        mixed_versions = self._probe("last-release-binary",
                                     lambda: self.probe.exists(self.binaries.last_release))

        base = self._base_builder(catchup_entries)
        assembler = ScenarioAssembler()

        for tp in self.workload_profiles:
            path = [tp.workload.name, tp.profile.name, "ClusterOfSize1"]
            size1 = base.with_options(with_cluster_size(1))
            if enable_lazyfs and tp.profile.minimal_qps <= self.lazyfs_max_minimal_qps:
                # Frequent compaction under LazyFS starves the workload, fall back to the default limit
                assembler.add(
                    path + ["LazyFS"], tp,
                    size1.with_options(with_lazyfs_enabled(True), with_compaction_batch_limit(1000))
                )
                # Keep compaction covered without LazyFS
                size1 = size1.with_options(with_compaction_batch_limit(10, 100))
                path = path + ["Compact"]
            assembler.add(path, tp, size1)

        for tp in self.workload_profiles:
            size3 = base.with_options(with_cluster_size(3), with_peer_tls(True), with_peer_proxy(True))
            if mixed_versions:
                size3 = size3.with_options(version_mix_axis())
            assembler.add([tp.workload.name, tp.profile.name, "ClusterOfSize3"], tp, size3)

        logger.info(f"Generated {len(assembler)} exploratory scenarios")
        return assembler.scenarios()

    def _base_builder(self, catchup_entries: bool) -> DescriptorBuilder:
        options: List[Applier] = self._environment_options() + [
            with_snapshot_count(50, 100, 1000),
            subset_options("timing-subset", timing_axis()),
            with_failpoints_enabled(True),
            # Low batch limit allows triggering multi batch compaction failpoints
            with_compaction_batch_limit(10, 100, 1000),
            with_watch_process_notify_interval(0.1),
        ]
        if catchup_entries:
            options.append(with_snapshot_catchup_entries(100))
        return DescriptorBuilder(tuple(options))
