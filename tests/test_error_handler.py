"""
Tests for error kinds and the error handler
"""
import logging
import pytest

from src.scenario_engine.error_handler import (
    ErrorHandler, ErrorContext, ErrorCategory, ErrorSeverity,
    ScenarioEngineError, CapabilityUnavailable, EnvironmentBrokenError,
    DuplicateScenarioError, UnresolvedAxisError
)


class TestErrorKinds:
    """Test the two tiers of environment errors stay distinct"""

    def test_capability_unavailable_details(self):
        error = CapabilityUnavailable("lazyfs", "binary not found")
        assert error.capability == "lazyfs"
        assert error.reason == "binary not found"
        assert str(error) == "lazyfs unavailable: binary not found"

    def test_error_hierarchy(self):
        assert issubclass(CapabilityUnavailable, ScenarioEngineError)
        assert issubclass(EnvironmentBrokenError, ScenarioEngineError)
        assert not issubclass(EnvironmentBrokenError, CapabilityUnavailable)
        assert not issubclass(CapabilityUnavailable, EnvironmentBrokenError)

    def test_value_errors(self):
        assert issubclass(DuplicateScenarioError, ValueError)
        assert issubclass(UnresolvedAxisError, ValueError)


class TestErrorHandler:
    """Test ErrorHandler"""

    def test_low_severity_continues(self):
        handler = ErrorHandler()
        context = ErrorContext(
            category=ErrorCategory.CAPABILITY_PROBE,
            severity=ErrorSeverity.LOW,
            message="lazyfs unavailable"
        )

        assert handler.handle_error(context) is True
        assert handler.error_history == [context]

    def test_high_severity_stops(self):
        handler = ErrorHandler()
        context = ErrorContext(
            category=ErrorCategory.SCENARIO_ASSEMBLY,
            severity=ErrorSeverity.HIGH,
            message="duplicate scenario"
        )
        assert handler.handle_error(context) is False

    def test_capability_gap(self):
        handler = ErrorHandler()
        result = handler.capability_gap(CapabilityUnavailable("lazyfs", "no fuse"), component="ExploratoryGenerator")

        assert result is True
        context = handler.error_history[0]
        assert context.category == ErrorCategory.CAPABILITY_PROBE
        assert context.severity == ErrorSeverity.LOW
        assert context.metadata == {'capability': 'lazyfs'}

    def test_environment_broken(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level(logging.CRITICAL):
            result = handler.environment_broken(EnvironmentBrokenError("no version"), component="RegressionGenerator")

        assert result is False
        assert handler.error_history[0].severity == ErrorSeverity.FATAL
        assert "[RegressionGenerator] [binary_introspection] no version" in caplog.text

    def test_error_summary(self):
        handler = ErrorHandler()
        handler.capability_gap(CapabilityUnavailable("lazyfs", "missing"))
        handler.capability_gap(CapabilityUnavailable("snapshot-catchup-entries", "old"))
        handler.environment_broken(EnvironmentBrokenError("no version"))

        summary = handler.get_error_summary()

        assert summary['total_errors'] == 3
        assert summary['by_category'] == {'capability_probe': 2, 'binary_introspection': 1}
        assert summary['by_severity'] == {'low': 2, 'fatal': 1}
        assert summary['recent_errors'][-1]['message'] == "no version"

    def test_clear_history(self):
        handler = ErrorHandler()
        handler.capability_gap(CapabilityUnavailable("lazyfs", "missing"))
        handler.clear_history()

        assert handler.get_error_summary()['total_errors'] == 0


if __name__ == "__main__":
    pytest.main([__file__])
