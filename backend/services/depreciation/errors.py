"""
Depreciation Engine - Input Errors

The calculators never raise for well-formed input. Malformed records are
rejected at the boundary with a structured payload:

{
    "error": "invalid_parameter",
    "parameter": "assets[0].effective_life",
    "message": "effective_life must be greater than 0 for individual assets"
}
"""

from typing import Any, Dict, Optional


class DepreciationInputError(ValueError):
    """Raised when an asset or capital works record cannot be projected."""

    def __init__(self, parameter: Optional[str], message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.parameter = parameter
        self.message = message
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        response = {
            "error": "invalid_parameter" if self.parameter else "validation_error",
            "parameter": self.parameter,
            "message": self.message,
        }
        if self.value is not None:
            response["received_value"] = str(self.value)[:100]  # Truncate for safety
        return response
