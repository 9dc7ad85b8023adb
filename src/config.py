"""
Generator configuration loaded from YAML or JSON files
"""
import json
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple
from .models import BinaryPaths, WorkloadProfile
from .scenario_engine.registry import DEFAULT_WORKLOAD_PROFILES, select_workload_profiles

DEFAULT_LAZYFS_MAX_MINIMAL_QPS = 100


@dataclass
class GeneratorConfig:
    """Environment locations and matrix knobs for scenario generation"""
    server_binary: str = "bin/kv-server"
    last_release_binary: str = "bin/kv-server-last-release"
    lazyfs_binary: str = "bin/lazyfs"
    lazyfs_max_minimal_qps: float = DEFAULT_LAZYFS_MAX_MINIMAL_QPS
    base_data_dir: str = "/tmp/kv-robustness"
    workload_profiles: Optional[List[str]] = None  # "<workload>/<profile>" entries, None keeps the defaults

    @property
    def binaries(self) -> BinaryPaths:
        return BinaryPaths(
            server=self.server_binary,
            last_release=self.last_release_binary,
            lazyfs=self.lazyfs_binary
        )

    def workload_profile_registry(self) -> Tuple[WorkloadProfile, ...]:
        if self.workload_profiles is None:
            return DEFAULT_WORKLOAD_PROFILES
        return select_workload_profiles(self.workload_profiles)


def parse_generator_config(config_dict: Optional[Dict[str, Any]]) -> GeneratorConfig:
    """Build a GeneratorConfig from a dictionary, raises ValueError on invalid fields"""
    if not config_dict:
        return GeneratorConfig()
    if not isinstance(config_dict, dict):
        raise ValueError("Configuration must be a mapping")

    known = set(GeneratorConfig.__dataclass_fields__)
    unknown = sorted(set(config_dict) - known)
    if unknown:
        raise ValueError(f"Unknown configuration fields: {', '.join(unknown)}")

    if 'lazyfs_max_minimal_qps' in config_dict:
        value = config_dict['lazyfs_max_minimal_qps']
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError("lazyfs_max_minimal_qps: Must be a non-negative number")

    if 'workload_profiles' in config_dict and config_dict['workload_profiles'] is not None:
        if not isinstance(config_dict['workload_profiles'], list):
            raise ValueError("workload_profiles: Must be a list of '<workload>/<profile>' names")

    config = GeneratorConfig(**config_dict)
    # Surface unknown workload or profile names at load time
    config.workload_profile_registry()
    return config


def load_generator_config(config_path: str) -> GeneratorConfig:
    """Load generator configuration from a YAML or JSON file"""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix in ['.yaml', '.yml']:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML syntax in {config_path}: {e}")
        elif path.suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")

    return parse_generator_config(data)
