"""
Server binary introspection
"""
import re
import logging
import subprocess
from typing import Dict
from packaging.version import Version, InvalidVersion
from ..interfaces import IBinaryIntrospector
from ..scenario_engine.error_handler import EnvironmentBrokenError

logger = logging.getLogger(__name__)

# Matches "Server Version: 3.6.0", "version 3.5.17" and "v3.6.0-rc.1"
VERSION_PATTERN = re.compile(r'[Vv]ersion:?\s*v?(\d+\.\d+\.\d+[\w.+-]*)|\bv(\d+\.\d+\.\d+[\w.+-]*)')


def parse_version_output(output: str) -> Version:
    """Extract the server version from `--version` output, raises ValueError if absent"""
    match = VERSION_PATTERN.search(output)
    if not match:
        raise ValueError(f"No version found in output: {output.strip()!r}")
    raw = match.group(1) or match.group(2)
    try:
        return Version(raw)
    except InvalidVersion as e:
        raise ValueError(f"Unparseable version '{raw}': {e}")


class BinaryIntrospector(IBinaryIntrospector):
    """Runs `<binary> --version` and parses the reported release"""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self._versions: Dict[str, Version] = {}

    def get_installed_version(self, path: str) -> Version:
        if path in self._versions:
            return self._versions[path]

        try:
            result = subprocess.run([path, '--version'], capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise EnvironmentBrokenError(f"Failed checking version of binary {path!r}: {e}") from e

        if result.returncode != 0:
            raise EnvironmentBrokenError(
                f"Failed checking version of binary {path!r}: exit code {result.returncode}: {result.stderr.strip()}"
            )

        try:
            version = parse_version_output(result.stdout)
        except ValueError as e:
            raise EnvironmentBrokenError(f"Failed checking version of binary {path!r}: {e}") from e

        logger.debug(f"Binary {path} reports version {version}")
        self._versions[path] = version
        return version
