"""
Error Handler - Error kinds and severity-based handling for scenario generation

Two tiers of environment problems are distinguished:
- capability gaps (optional tool missing, tunable unsupported) narrow the
  generated matrix and generation continues
- introspection failures (installed binary version unknown) mean the test
  environment is broken and generation must abort
"""
import logging
from typing import Optional, Dict, Any, List
from enum import Enum
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ScenarioEngineError(Exception):
    """Base class for scenario generation errors"""


class CapabilityUnavailable(ScenarioEngineError):
    """An optional environment capability is missing; generation narrows and continues"""

    def __init__(self, capability: str, reason: str):
        super().__init__(f"{capability} unavailable: {reason}")
        self.capability = capability
        self.reason = reason


class EnvironmentBrokenError(ScenarioEngineError):
    """The environment cannot be introspected; generation must abort"""


class DuplicateScenarioError(ScenarioEngineError, ValueError):
    """Two scenarios in one generation call resolved to the same name"""


class UnresolvedAxisError(ScenarioEngineError, ValueError):
    """A descriptor with randomizable axes was built without a random source"""


class ErrorSeverity(Enum):
    """Severity levels for errors"""
    LOW = "low"  # Capability gap, generation continues
    MEDIUM = "medium"
    HIGH = "high"
    FATAL = "fatal"  # Broken environment, generation aborts


class ErrorCategory(Enum):
    """Categories of errors for targeted handling"""
    CAPABILITY_PROBE = "capability_probe"
    BINARY_INTROSPECTION = "binary_introspection"
    SCENARIO_ASSEMBLY = "scenario_assembly"
    CONFIGURATION = "configuration"


@dataclass
class ErrorContext:
    """Context information for an error"""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception: Optional[Exception] = None
    component: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class ErrorHandler:
    """
    Centralized error bookkeeping for scenario generators.

    Records every error context, logs it at a level matching its severity and
    tells the caller whether generation may continue.
    """

    def __init__(self):
        self.error_history: List[ErrorContext] = []

    def handle_error(self, error_context: ErrorContext) -> bool:
        """Record and log an error, returns True if generation may continue"""
        self._log_error(error_context)
        self.error_history.append(error_context)

        if error_context.severity == ErrorSeverity.FATAL:
            return False
        return error_context.severity in [ErrorSeverity.LOW, ErrorSeverity.MEDIUM]

    def capability_gap(self, error: CapabilityUnavailable, component: Optional[str] = None) -> bool:
        """Record a non-fatal capability gap"""
        return self.handle_error(ErrorContext(
            category=ErrorCategory.CAPABILITY_PROBE,
            severity=ErrorSeverity.LOW,
            message=str(error),
            exception=error,
            component=component,
            metadata={'capability': error.capability}
        ))

    def environment_broken(self, error: Exception, component: Optional[str] = None) -> bool:
        """Record a fatal introspection failure"""
        return self.handle_error(ErrorContext(
            category=ErrorCategory.BINARY_INTROSPECTION,
            severity=ErrorSeverity.FATAL,
            message=str(error),
            exception=error,
            component=component
        ))

    def _log_error(self, error_context: ErrorContext):
        """Log error with appropriate level based on severity"""
        log_message = f"[{error_context.category.value}] {error_context.message}"

        if error_context.component:
            log_message = f"[{error_context.component}] {log_message}"

        if error_context.severity == ErrorSeverity.FATAL:
            logger.critical(log_message)
        elif error_context.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        elif error_context.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        else:
            logger.info(log_message)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors encountered"""
        errors_by_category = {}
        errors_by_severity = {}

        for error in self.error_history:
            category = error.category.value
            errors_by_category[category] = errors_by_category.get(category, 0) + 1

            severity = error.severity.value
            errors_by_severity[severity] = errors_by_severity.get(severity, 0) + 1

        return {
            'total_errors': len(self.error_history),
            'by_category': errors_by_category,
            'by_severity': errors_by_severity,
            'recent_errors': [
                {
                    'category': e.category.value,
                    'severity': e.severity.value,
                    'message': e.message
                }
                for e in self.error_history[-10:]
            ]
        }

    def clear_history(self):
        """Clear error history"""
        self.error_history.clear()
        logger.debug("Error history cleared")
