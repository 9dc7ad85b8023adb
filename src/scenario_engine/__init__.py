"""
Scenario Engine - composes robustness test scenarios from workloads and cluster options
"""
from .options import ClusterOption, OptionGroup, RandomizableAxis, SubsetAxis
from .descriptor_builder import DescriptorBuilder, ResolvedCluster
from .assembler import ScenarioAssembler, scenario_name
from .exploratory import ExploratoryGenerator
from .regression import RegressionGenerator
from .export_utils import ScenarioExporter
from .error_handler import (
    ErrorHandler, ScenarioEngineError, CapabilityUnavailable, EnvironmentBrokenError,
    DuplicateScenarioError, UnresolvedAxisError
)

__all__ = [
    'ClusterOption',
    'OptionGroup',
    'RandomizableAxis',
    'SubsetAxis',
    'DescriptorBuilder',
    'ResolvedCluster',
    'ScenarioAssembler',
    'scenario_name',
    'ExploratoryGenerator',
    'RegressionGenerator',
    'ScenarioExporter',
    'ErrorHandler',
    'ScenarioEngineError',
    'CapabilityUnavailable',
    'EnvironmentBrokenError',
    'DuplicateScenarioError',
    'UnresolvedAxisError',
]
