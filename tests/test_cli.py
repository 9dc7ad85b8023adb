"""
Tests for CLI functionality
"""
import pytest
import yaml
from unittest.mock import Mock, patch
from packaging.version import Version

from src.cli import ScenarioCLI, create_parser, main, EXIT_ENVIRONMENT_BROKEN
from src.interfaces import ICapabilityProbe, IBinaryIntrospector
from src.scenario_engine import (
    ExploratoryGenerator, RegressionGenerator, EnvironmentBrokenError, ErrorHandler, CapabilityUnavailable
)


@pytest.fixture
def probe():
    probe = Mock(spec=ICapabilityProbe)
    probe.supports_lazyfs.return_value = False
    probe.supports_tunable.return_value = False
    probe.exists.return_value = True
    return probe


@pytest.fixture
def mock_composer(probe):
    """Create a composer mock returning real scenarios"""
    introspector = Mock(spec=IBinaryIntrospector)
    introspector.get_installed_version.return_value = Version("3.6.0")
    exploratory = ExploratoryGenerator(probe).generate()
    regression = RegressionGenerator(probe, introspector).generate()

    composer = Mock()
    composer.exploratory_scenarios.return_value = exploratory
    composer.regression_scenarios.return_value = regression
    composer.all_scenarios.return_value = exploratory + regression
    composer.find_scenario.side_effect = lambda name: {s.name: s for s in exploratory + regression}[name]
    composer.error_handler = ErrorHandler()
    return composer


class TestArgumentParser:
    """Test argument parser"""

    def test_parse_list_defaults(self):
        args = create_parser().parse_args(['list'])

        assert args.command == 'list'
        assert args.mode == 'all'
        assert args.format == 'yaml'
        assert args.output is None

    def test_parse_list_options(self):
        args = create_parser().parse_args([
            'list', '--mode', 'regression', '--config', 'config.yaml', '--output', 'out.json', '--format', 'json'
        ])

        assert args.mode == 'regression'
        assert args.config == 'config.yaml'
        assert args.output == 'out.json'
        assert args.format == 'json'

    def test_parse_invalid_mode(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['list', '--mode', 'random'])

    def test_parse_resolve(self):
        args = create_parser().parse_args(['resolve', 'KVPut/HighTraffic/ClusterOfSize1', '--seed', '42'])

        assert args.command == 'resolve'
        assert args.name == 'KVPut/HighTraffic/ClusterOfSize1'
        assert args.seed == 42


class TestScenarioCLI:
    """Test ScenarioCLI class"""

    @patch('src.cli.ScenarioComposer')
    def test_list_exploratory(self, mock_composer_class, mock_composer, capsys):
        mock_composer_class.return_value = mock_composer
        args = create_parser().parse_args(['list', '--mode', 'exploratory'])

        assert ScenarioCLI().list_scenarios(args) == 0

        output = capsys.readouterr().out
        assert "KVPut/HighTraffic/ClusterOfSize3" in output
        assert "Total Scenarios: 8" in output
        mock_composer.regression_scenarios.assert_not_called()

    @patch('src.cli.ScenarioComposer')
    def test_list_verbose(self, mock_composer_class, mock_composer, capsys):
        mock_composer_class.return_value = mock_composer
        args = create_parser().parse_args(['list', '--mode', 'regression', '--verbose'])

        assert ScenarioCLI().list_scenarios(args) == 0

        output = capsys.readouterr().out
        assert "Fault: BlackholeUntilSnapshot" in output
        assert "Watch: request progress" in output

    @patch('src.cli.ScenarioComposer')
    def test_list_verbose_counts_only_capability_gaps(self, mock_composer_class, mock_composer, capsys):
        mock_composer_class.return_value = mock_composer
        mock_composer.error_handler.capability_gap(CapabilityUnavailable("lazyfs", "/dev/fuse not present"))
        mock_composer.error_handler.environment_broken(RuntimeError("stale version cache"))
        args = create_parser().parse_args(['list', '--mode', 'exploratory', '--verbose'])

        assert ScenarioCLI().list_scenarios(args) == 0

        output = capsys.readouterr().out
        assert "Narrowed by 1 capability gap(s):" in output
        assert "lazyfs unavailable: /dev/fuse not present" in output
        assert "stale version cache" not in output

    @patch('src.cli.ScenarioComposer')
    def test_list_with_output(self, mock_composer_class, mock_composer, tmp_path):
        mock_composer_class.return_value = mock_composer
        output_file = tmp_path / "scenarios.yaml"
        args = create_parser().parse_args(['list', '--output', str(output_file)])

        assert ScenarioCLI().list_scenarios(args) == 0

        with open(output_file) as f:
            data = yaml.safe_load(f)
        assert data['total_scenarios'] == 13

    def test_list_with_bad_config(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("x = 1")
        args = create_parser().parse_args(['list', '--config', str(config_file)])

        assert ScenarioCLI().list_scenarios(args) == 1

    @patch('src.cli.ScenarioComposer')
    def test_list_with_config(self, mock_composer_class, mock_composer, tmp_path):
        mock_composer_class.return_value = mock_composer
        config_file = tmp_path / "config.yaml"
        with open(config_file, 'w') as f:
            yaml.dump({'server_binary': '/opt/kv'}, f)
        args = create_parser().parse_args(['list', '--config', str(config_file)])

        cli = ScenarioCLI()
        assert cli.list_scenarios(args) == 0
        assert cli.config.server_binary == '/opt/kv'
        mock_composer_class.assert_called_once_with(cli.config)

    @patch('src.cli.ScenarioComposer')
    def test_resolve(self, mock_composer_class, mock_composer, capsys):
        mock_composer_class.return_value = mock_composer
        args = create_parser().parse_args(['resolve', 'KVPut/HighTraffic/ClusterOfSize3', '--seed', '42'])

        assert ScenarioCLI().resolve_scenario(args) == 0

        output = capsys.readouterr().out
        assert "Seed: 42" in output
        assert "version-mix:" in output
        assert "cluster_size: 3" in output

    @patch('src.cli.ScenarioComposer')
    def test_resolve_unknown(self, mock_composer_class, mock_composer, capsys):
        mock_composer_class.return_value = mock_composer
        args = create_parser().parse_args(['resolve', 'Nope'])

        assert ScenarioCLI().resolve_scenario(args) == 1
        assert "No scenario named 'Nope'" in capsys.readouterr().out


class TestCLIMain:
    """Test main CLI entry point"""

    @patch('src.cli.ScenarioCLI')
    def test_main_list_command(self, mock_cli_class):
        mock_cli = Mock()
        mock_cli.list_scenarios.return_value = 0
        mock_cli_class.return_value = mock_cli

        with patch('sys.argv', ['cli', 'list']):
            result = main()

        assert result == 0
        mock_cli.list_scenarios.assert_called_once()

    @patch('src.cli.ScenarioCLI')
    def test_main_resolve_command(self, mock_cli_class):
        mock_cli = Mock()
        mock_cli.resolve_scenario.return_value = 0
        mock_cli_class.return_value = mock_cli

        assert main(['resolve', 'Issue13766']) == 0
        mock_cli.resolve_scenario.assert_called_once()

    def test_main_no_command(self):
        with patch('sys.argv', ['cli']):
            result = main()

        assert result == 1

    @patch('src.cli.ScenarioCLI')
    def test_main_broken_environment(self, mock_cli_class, capsys):
        mock_cli = Mock()
        mock_cli.list_scenarios.side_effect = EnvironmentBrokenError("cannot read server version")
        mock_cli_class.return_value = mock_cli

        assert main(['list', '--mode', 'regression']) == EXIT_ENVIRONMENT_BROKEN
        assert "broken test environment" in capsys.readouterr().out

    @patch('src.cli.ScenarioCLI')
    def test_main_keyboard_interrupt(self, mock_cli_class):
        mock_cli = Mock()
        mock_cli.list_scenarios.side_effect = KeyboardInterrupt()
        mock_cli_class.return_value = mock_cli

        assert main(['list']) == 130

    @patch('src.cli.ScenarioCLI')
    def test_main_unexpected_error(self, mock_cli_class):
        mock_cli = Mock()
        mock_cli.list_scenarios.side_effect = RuntimeError("boom")
        mock_cli_class.return_value = mock_cli

        assert main(['list']) == 1


if __name__ == "__main__":
    pytest.main([__file__])
