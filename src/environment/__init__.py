"""
Environment - capability probes and server binary introspection

Components:
- LocalCapabilityProbe: LazyFS availability, tunable support, file existence
- BinaryIntrospector: installed server version from `<binary> --version`
"""
from .probes import LocalCapabilityProbe, TUNABLE_MIN_VERSIONS
from .binary import BinaryIntrospector, parse_version_output

__all__ = [
    'LocalCapabilityProbe',
    'TUNABLE_MIN_VERSIONS',
    'BinaryIntrospector',
    'parse_version_output',
]
