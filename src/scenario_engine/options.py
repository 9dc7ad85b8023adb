"""
Cluster options - named appliers over ClusterDescriptor and the axes that defer
a random choice between them until the cluster is instantiated
"""
import random
from dataclasses import dataclass
from typing import Callable, Tuple, Union, List, Optional
from ..models import ClusterDescriptor, ClusterVersion


@dataclass(frozen=True)
class ClusterOption:
    """A single named mutation of a ClusterDescriptor"""
    name: str
    apply: Callable[[ClusterDescriptor], None]

    def __call__(self, descriptor: ClusterDescriptor) -> None:
        self.apply(descriptor)


@dataclass(frozen=True)
class OptionGroup:
    """Ordered options forming one coherent alternative"""
    options: Tuple['Applier', ...]
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'options', tuple(self.options))

    @property
    def name(self) -> str:
        if self.label:
            return self.label
        return "+".join(_applier_name(option) for option in self.options)


@dataclass(frozen=True)
class RandomizableAxis:
    """
    Mutually exclusive option groups, exactly one of which is applied.

    Repeating a group gives it proportionally more weight in the draw.
    """
    name: str
    groups: Tuple[OptionGroup, ...]

    def __post_init__(self):
        object.__setattr__(self, 'groups', tuple(self.groups))
        if not self.groups:
            raise ValueError(f"Axis '{self.name}' needs at least one option group")

    def resolve(self, rng: random.Random) -> OptionGroup:
        return rng.choice(self.groups)


@dataclass(frozen=True)
class SubsetAxis:
    """Options applied as a random, order-preserving subset (possibly empty)"""
    name: str
    options: Tuple['Applier', ...]

    def __post_init__(self):
        object.__setattr__(self, 'options', tuple(self.options))

    def resolve(self, rng: random.Random) -> OptionGroup:
        chosen = [option for option in self.options if rng.random() < 0.5]
        return OptionGroup(tuple(chosen), label="+".join(_applier_name(o) for o in chosen) or "none")


Applier = Union[ClusterOption, RandomizableAxis, SubsetAxis]


def _applier_name(applier: Applier) -> str:
    return applier.name


def option_groups(name: str, *groups: Union[OptionGroup, List[Applier], Tuple[Applier, ...]]) -> RandomizableAxis:
    """Build an axis from option groups, plain sequences are wrapped as unlabeled groups"""
    return RandomizableAxis(name, tuple(
        group if isinstance(group, OptionGroup) else OptionGroup(tuple(group))
        for group in groups
    ))


def subset_options(name: str, *options: Applier) -> SubsetAxis:
    return SubsetAxis(name, options)


def _int_choice(name: str, setter: Callable[[ClusterDescriptor, int], None], values: Tuple[int, ...]) -> Applier:
    """A fixed option for one value, an axis over single-option groups for several"""
    if not values:
        raise ValueError(f"{name} requires at least one value")
    options = [ClusterOption(f"{name}={v}", lambda d, v=v: setter(d, v)) for v in values]
    if len(options) == 1:
        return options[0]
    return RandomizableAxis(name, tuple(OptionGroup((option,)) for option in options))


def with_cluster_size(size: int) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.cluster_size = size
    return ClusterOption(f"cluster-size={size}", apply)


def with_tick_ms(tick_ms: int) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.tick_ms = tick_ms
    return ClusterOption(f"tick-ms={tick_ms}", apply)


def with_election_ms(election_ms: int) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.election_ms = election_ms
    return ClusterOption(f"election-ms={election_ms}", apply)


def with_snapshot_count(*values: int) -> Applier:
    def apply(d: ClusterDescriptor, v: int):
        d.snapshot_count = v
    return _int_choice("snapshot-count", apply, values)


def with_compaction_batch_limit(*values: int) -> Applier:
    def apply(d: ClusterDescriptor, v: int):
        d.compaction_batch_limit = v
    return _int_choice("compaction-batch-limit", apply, values)


def with_snapshot_catchup_entries(entries: int) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.snapshot_catchup_entries = entries
    return ClusterOption(f"snapshot-catchup-entries={entries}", apply)


def with_failpoints_enabled(enabled: bool = True) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.failpoints_enabled = enabled
    return ClusterOption(f"failpoints={enabled}", apply)


def with_lazyfs_enabled(enabled: bool = True) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.lazyfs_enabled = enabled
    return ClusterOption(f"lazyfs={enabled}", apply)


def with_watch_process_notify_interval(seconds: float) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.watch_process_notify_interval = seconds
    return ClusterOption(f"watch-progress-notify-interval={seconds}s", apply)


def with_peer_tls(enabled: bool = True) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.is_peer_tls = enabled
    return ClusterOption(f"peer-tls={enabled}", apply)


def with_peer_proxy(enabled: bool = True) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.peer_proxy = enabled
    return ClusterOption(f"peer-proxy={enabled}", apply)


def with_version(version: ClusterVersion) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.version = version
    return ClusterOption(f"version={version.value}", apply)


def with_initial_leader_index(index: int) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.initial_leader_index = index
    return ClusterOption(f"initial-leader-index={index}", apply)


def with_binaries(server: str, last_release: str) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.server_binary = server
        d.last_release_binary = last_release
    return ClusterOption("binaries", apply)


def with_base_data_dir(path: str) -> ClusterOption:
    def apply(d: ClusterDescriptor):
        d.base_data_dir = path
    return ClusterOption(f"base-data-dir={path}", apply)


def with_member_override(index: int, **flags) -> ClusterOption:
    """Per-member flags layered over the shared configuration"""
    def apply(d: ClusterDescriptor):
        d.member_overrides.setdefault(index, {}).update(flags)
    rendered = ",".join(f"{k}={v}" for k, v in sorted(flags.items()))
    return ClusterOption(f"member[{index}]:{rendered}", apply)
