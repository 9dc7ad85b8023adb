"""
Base interfaces and abstract classes for all major components
"""
from abc import ABC, abstractmethod
from typing import List
from packaging.version import Version
from .models import Scenario


class ICapabilityProbe(ABC):
    """Interface for environment capability checks"""

    @abstractmethod
    def supports_lazyfs(self) -> bool:
        """Check whether the LazyFS filesystem layer can be used"""
        pass

    @abstractmethod
    def supports_tunable(self, name: str) -> bool:
        """Check whether the installed server binary accepts a tunable"""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file exists"""
        pass


class IBinaryIntrospector(ABC):
    """Interface for server binary introspection"""

    @abstractmethod
    def get_installed_version(self, path: str) -> Version:
        """Return the version of the binary at path, raises EnvironmentBrokenError on failure"""
        pass


class IScenarioGenerator(ABC):
    """Interface for scenario generation"""

    @abstractmethod
    def generate(self) -> List[Scenario]:
        """Generate the ordered list of scenarios"""
        pass
