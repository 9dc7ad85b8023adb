"""
Tests for environment probes and binary introspection
"""
import subprocess
import pytest
from unittest.mock import Mock, patch
from packaging.version import Version
from src.interfaces import IBinaryIntrospector
from src.models import BinaryPaths
from src.environment import LocalCapabilityProbe, BinaryIntrospector, parse_version_output
from src.environment.probes import FUSE_DEVICE
from src.scenario_engine.error_handler import CapabilityUnavailable, EnvironmentBrokenError


@pytest.mark.parametrize("output,expected", [
    ("kv-server Version: 3.5.17\nGit SHA: 5a0a7a3\nGo Version: go1.21.8\n", "3.5.17"),
    ("Server version 3.6.0", "3.6.0"),
    ("v3.6.0-rc.1", "3.6.0rc1"),
    ("kv-server Version: 3.6.0-alpha.0\n", "3.6.0a0"),
])
def test_parse_version_output(output, expected):
    assert parse_version_output(output) == Version(expected)


def test_parse_version_output_without_version():
    with pytest.raises(ValueError):
        parse_version_output("usage: kv-server [flags]")


class TestBinaryIntrospector:
    """Test BinaryIntrospector"""

    @patch('src.environment.binary.subprocess.run')
    def test_get_installed_version(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="kv-server Version: 3.5.17\n", stderr="")

        version = BinaryIntrospector().get_installed_version("/opt/kv-server")

        assert version == Version("3.5.17")
        args, kwargs = mock_run.call_args
        assert args[0] == ["/opt/kv-server", "--version"]
        assert kwargs['capture_output'] is True

    @patch('src.environment.binary.subprocess.run')
    def test_version_is_cached(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="kv-server Version: 3.5.17\n", stderr="")
        introspector = BinaryIntrospector()

        introspector.get_installed_version("/opt/kv-server")
        introspector.get_installed_version("/opt/kv-server")

        assert mock_run.call_count == 1

    @patch('src.environment.binary.subprocess.run')
    def test_missing_binary_is_fatal(self, mock_run):
        mock_run.side_effect = FileNotFoundError("No such file or directory")

        with pytest.raises(EnvironmentBrokenError, match="/opt/kv-server"):
            BinaryIntrospector().get_installed_version("/opt/kv-server")

    @patch('src.environment.binary.subprocess.run')
    def test_timeout_is_fatal(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="kv-server", timeout=10)

        with pytest.raises(EnvironmentBrokenError):
            BinaryIntrospector().get_installed_version("/opt/kv-server")

    @patch('src.environment.binary.subprocess.run')
    def test_nonzero_exit_is_fatal(self, mock_run):
        mock_run.return_value = Mock(returncode=2, stdout="", stderr="unknown flag")

        with pytest.raises(EnvironmentBrokenError, match="exit code 2"):
            BinaryIntrospector().get_installed_version("/opt/kv-server")

    @patch('src.environment.binary.subprocess.run')
    def test_unparseable_output_is_fatal(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="garbage", stderr="")

        with pytest.raises(EnvironmentBrokenError):
            BinaryIntrospector().get_installed_version("/opt/kv-server")


class TestLocalCapabilityProbe:
    """Test LocalCapabilityProbe"""

    @pytest.fixture
    def binaries(self):
        return BinaryPaths(server="/opt/kv-server", last_release="/opt/kv-server-last", lazyfs="/opt/lazyfs")

    def make_probe(self, binaries, version="3.5.14"):
        introspector = Mock(spec=IBinaryIntrospector)
        introspector.get_installed_version.return_value = Version(version)
        return LocalCapabilityProbe(binaries, introspector)

    def test_exists(self, tmp_path, binaries):
        present = tmp_path / "kv-server-last"
        present.write_text("")
        probe = self.make_probe(binaries)

        assert probe.exists(str(present)) is True
        assert probe.exists(str(tmp_path / "missing")) is False

    def test_lazyfs_available(self, binaries):
        probe = self.make_probe(binaries)
        with patch('src.environment.probes.os.path.exists', return_value=True):
            assert probe.supports_lazyfs() is True

    def test_lazyfs_binary_missing(self, binaries):
        probe = self.make_probe(binaries)
        with patch('src.environment.probes.os.path.exists', side_effect=lambda p: p != "/opt/lazyfs"):
            with pytest.raises(CapabilityUnavailable, match="binary not found"):
                probe.supports_lazyfs()

    def test_lazyfs_without_fuse(self, binaries):
        probe = self.make_probe(binaries)
        with patch('src.environment.probes.os.path.exists', side_effect=lambda p: p != FUSE_DEVICE):
            with pytest.raises(CapabilityUnavailable) as exc_info:
                probe.supports_lazyfs()
        assert exc_info.value.capability == "lazyfs"

    @pytest.mark.parametrize("version,supported", [
        ("3.5.13", False),
        ("3.5.14", True),
        ("3.6.0", True),
    ])
    def test_supports_tunable_by_version(self, binaries, version, supported):
        probe = self.make_probe(binaries, version)
        assert probe.supports_tunable("snapshot-catchup-entries") is supported

    def test_unknown_tunable(self, binaries):
        with pytest.raises(CapabilityUnavailable):
            self.make_probe(binaries).supports_tunable("no-such-flag")

    def test_tunable_probe_with_broken_binary_is_not_fatal(self, binaries):
        introspector = Mock(spec=IBinaryIntrospector)
        introspector.get_installed_version.side_effect = EnvironmentBrokenError("cannot execute")
        probe = LocalCapabilityProbe(binaries, introspector)

        with pytest.raises(CapabilityUnavailable):
            probe.supports_tunable("snapshot-catchup-entries")
        introspector.get_installed_version.assert_called_once_with("/opt/kv-server")


if __name__ == "__main__":
    pytest.main([__file__])
