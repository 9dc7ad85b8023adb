"""
Descriptor Builder - folds ordered cluster options over a default descriptor
"""
import copy
import random
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Dict, Iterator
from ..models import ClusterDescriptor
from .options import Applier, ClusterOption, RandomizableAxis, SubsetAxis
from .error_handler import UnresolvedAxisError

logger = logging.getLogger(__name__)


@dataclass
class ResolvedCluster:
    """A descriptor with every axis resolved, plus what was drawn"""
    descriptor: ClusterDescriptor
    seed: int
    choices: Dict[str, List[str]] = field(default_factory=dict)


class DescriptorBuilder:
    """
    Immutable recipe for a ClusterDescriptor.

    Options are folded left to right, so a later option overwrites whatever an
    earlier one set. Randomizable axes stay unresolved until build() is given a
    random source; the builder never validates the result.
    """

    def __init__(self, options: Tuple[Applier, ...] = (), base: Optional[ClusterDescriptor] = None):
        self._options = tuple(options)
        self._base = base

    @property
    def options(self) -> Tuple[Applier, ...]:
        return self._options

    def with_options(self, *options: Applier) -> 'DescriptorBuilder':
        """Return a new builder with options appended"""
        return DescriptorBuilder(self._options + tuple(options), self._base)

    def axes(self) -> List[Applier]:
        """Top-level options whose choice is deferred"""
        return [option for option in self._options if isinstance(option, (RandomizableAxis, SubsetAxis))]

    @property
    def is_deferred(self) -> bool:
        return bool(self.axes())

    def option_names(self) -> List[str]:
        return [option.name for option in self._options]

    def build(self, rng: Optional[random.Random] = None) -> ClusterDescriptor:
        """Fold every option onto a fresh copy of the base descriptor."""
        return self._fold(rng, {})

    def resolve(self, seed: Optional[int] = None) -> ResolvedCluster:
        """Build with axes drawn from a seeded random source, logging the seed for reproduction."""
        if seed is None:
            seed = random.randint(0, 2**32 - 1)
        if self.is_deferred:
            logger.info(f"Resolving cluster options with seed {seed}")

        choices: Dict[str, List[str]] = {}
        descriptor = self._fold(random.Random(seed), choices)
        return ResolvedCluster(descriptor=descriptor, seed=seed, choices=choices)

    def _fold(self, rng: Optional[random.Random], choices: Dict[str, List[str]]) -> ClusterDescriptor:
        descriptor = copy.deepcopy(self._base) if self._base is not None else ClusterDescriptor()
        for option in self._expand(self._options, rng, choices):
            option(descriptor)
        return descriptor

    def _expand(self, options, rng: Optional[random.Random], choices: Dict[str, List[str]]) -> Iterator[ClusterOption]:
        for option in options:
            if isinstance(option, ClusterOption):
                yield option
                continue

            if rng is None:
                raise UnresolvedAxisError(f"Option axis '{option.name}' needs a random source to resolve")
            group = option.resolve(rng)
            choices.setdefault(option.name, []).append(group.name)
            yield from self._expand(group.options, rng, choices)

    def __repr__(self):
        return f"DescriptorBuilder({', '.join(self.option_names())})"
