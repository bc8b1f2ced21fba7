"""
Custom exceptions for the Pool pH Dosing MCP Server.

The dosing engine itself never raises: out-of-range chemistry is reported
through the ``warnings`` list of the result. The tool layer follows a
"FAIL LOUDLY" policy instead:
- Invalid tool input raises a typed exception
- No returning {"error": ...} patterns
- Exceptions are converted to MCP isError=True by FastMCP

Exception Hierarchy:
    PoolChemistryError (base)
    ├── InputValidationError
    ├── ParameterNotFoundError
    └── BatchSimulationError
"""

from typing import Any, Dict, List, Optional


class PoolChemistryError(Exception):
    """Base exception for all pool chemistry errors.

    All exceptions in this module inherit from this class,
    allowing for broad exception handling when needed.
    """
    pass


class InputValidationError(PoolChemistryError):
    """Invalid input data provided to a tool.

    Raised when:
    - Required fields are missing or have the wrong type
    - A chemical or surface name is not recognised
    - strict_validation is enabled and volume/alkalinity are not physical

    Attributes:
        field: Name of the offending field (if known)
        value: The rejected value (if known)
    """
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        super().__init__(message)
        self.field = field
        self.value = value


class ParameterNotFoundError(PoolChemistryError):
    """A requested sweep parameter is not part of the pool scenario.

    Attributes:
        parameter: The parameter that was requested
        available_parameters: Parameters that can be swept
    """
    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        available_parameters: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.parameter = parameter
        self.available_parameters = available_parameters or []


class BatchSimulationError(PoolChemistryError):
    """Batch processing failed.

    Raised when allow_partial=False and any scenario fails.
    Contains details about which scenarios failed.

    Attributes:
        failed_scenarios: List of scenario names that failed
        errors: Dict mapping scenario name to error message
        completed_scenarios: List of scenarios that completed successfully
    """
    def __init__(
        self,
        message: str,
        failed_scenarios: Optional[List[str]] = None,
        errors: Optional[Dict[str, str]] = None,
        completed_scenarios: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.failed_scenarios = failed_scenarios or []
        self.errors = errors or {}
        self.completed_scenarios = completed_scenarios or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured error reporting."""
        return {
            "error_type": "batch_simulation_error",
            "failed_scenarios": self.failed_scenarios,
            "errors": self.errors,
            "completed_scenarios": self.completed_scenarios,
            "message": str(self)
        }
