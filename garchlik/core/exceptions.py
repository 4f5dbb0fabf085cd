'''
Exception and warning classes for garchlik.

The likelihood kernels fail in two ways that matter to a calling optimizer:
inconsistent shapes (reported before any recursion step runs) and numerically
degenerate states reached during a recursion (an underflowed lagged variance,
a covariance matrix that is not positive definite). Each gets its own type so
the caller can reject or penalize a trial point without parsing messages.

All errors derive from GarchLikError, which renders optional details, a
context dictionary and the location of the raising call into its message.
'''

from typing import Any, Dict, Optional, Tuple, Union
import inspect
import warnings
from pathlib import Path

import numpy as np


def _caller_location() -> Optional[str]:
    """Return ``file:line`` of the first frame outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return None
        return f"{Path(frame.f_code.co_filename).name}:{frame.f_lineno}"
    finally:
        del frame


def _format_message(message: str,
                    details: Optional[str],
                    context: Dict[str, Any]) -> str:
    full_message = message
    if details:
        full_message += f"\n\nDetails: {details}"
    if context:
        context_str = "\n".join(f"  {k}: {v}" for k, v in context.items())
        full_message += f"\n\nContext:\n{context_str}"
    location = _caller_location()
    if location:
        full_message += f"\n\nLocation: {location}"
    return full_message


def _summarize(value: Any) -> Any:
    # Large arrays are reduced to their shape to keep messages readable
    if isinstance(value, np.ndarray) and value.size > 10:
        return f"Array with shape {value.shape}"
    return value


class GarchLikError(Exception):
    """Base exception class for all garchlik errors.

    Attributes:
        message: The error message
        details: Additional details about the error
        context: Dictionary containing contextual information about the error
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(_format_message(message, details, self.context))


class ParameterError(GarchLikError):
    """Exception raised when parameter values violate their constraints.

    Attributes:
        param_name: The name of the offending parameter
        param_value: The invalid value
        constraint: Description of the violated constraint
    """

    def __init__(self,
                 message: str,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.param_name = param_name
        self.param_value = param_value
        self.constraint = constraint

        context_dict = context or {}
        if param_name:
            context_dict["Parameter"] = param_name
        if param_value is not None:
            context_dict["Value"] = _summarize(param_value)
        if constraint:
            context_dict["Constraint"] = constraint

        super().__init__(message, details, context_dict)


class DimensionError(GarchLikError):
    """Exception raised when parameter vectors or data arrays have inconsistent shapes.

    Raised before any recursion step is evaluated, since partial results
    computed from mismatched inputs are meaningless.

    Attributes:
        array_name: The name of the offending array
        expected_shape: The expected shape (or a description of it)
        actual_shape: The shape that was received
    """

    def __init__(self,
                 message: str,
                 array_name: Optional[str] = None,
                 expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                 actual_shape: Optional[Tuple[int, ...]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.array_name = array_name
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape

        context_dict = context or {}
        if array_name:
            context_dict["Array"] = array_name
        if expected_shape is not None:
            context_dict["Expected Shape"] = expected_shape
        if actual_shape is not None:
            context_dict["Actual Shape"] = actual_shape

        super().__init__(message, details, context_dict)


class NumericError(GarchLikError):
    """Exception raised when a recursion reaches a numerically degenerate state.

    Examples are a lagged conditional variance that underflows to zero and a
    conditional covariance matrix that is not positive definite.

    Attributes:
        operation: The operation that failed
        values: The offending value(s), typically the time index
        error_type: Short classification of the failure
    """

    def __init__(self,
                 message: str,
                 operation: Optional[str] = None,
                 values: Optional[Any] = None,
                 error_type: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        self.values = values
        self.error_type = error_type

        context_dict = context or {}
        if operation:
            context_dict["Operation"] = operation
        if values is not None:
            context_dict["Values"] = _summarize(values)
        if error_type:
            context_dict["Error Type"] = error_type

        super().__init__(message, details, context_dict)


class DataError(GarchLikError):
    """Exception raised when input data contain invalid values.

    Attributes:
        data_name: The name of the offending data
        issue: Description of the problem
        index: Where the problem was found
    """

    def __init__(self,
                 message: str,
                 data_name: Optional[str] = None,
                 issue: Optional[str] = None,
                 index: Optional[Union[int, Tuple[int, ...], str]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.data_name = data_name
        self.issue = issue
        self.index = index

        context_dict = context or {}
        if data_name:
            context_dict["Data"] = data_name
        if issue:
            context_dict["Issue"] = issue
        if index is not None:
            context_dict["Index"] = index

        super().__init__(message, details, context_dict)


class ConfigurationError(GarchLikError):
    """Exception raised for invalid configuration settings.

    Attributes:
        config_file: The configuration file involved, if any
        setting: The setting that caused the error
        value: The invalid value
        issue: Description of the problem
    """

    def __init__(self,
                 message: str,
                 config_file: Optional[Union[str, Path]] = None,
                 setting: Optional[str] = None,
                 value: Optional[Any] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.config_file = config_file
        self.setting = setting
        self.value = value
        self.issue = issue

        context_dict = context or {}
        if config_file:
            context_dict["Config File"] = str(config_file)
        if setting:
            context_dict["Setting"] = setting
        if value is not None:
            context_dict["Value"] = value
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class GarchLikWarning(Warning):
    """Base warning class for all garchlik warnings."""

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(_format_message(message, details, self.context))


class NumericWarning(GarchLikWarning):
    """Warning for values that are valid but close to numerical degeneracy.

    Attributes:
        operation: The operation where the issue was detected
        issue: Description of the issue
        value: The value that triggered the warning
    """

    def __init__(self,
                 message: str,
                 operation: Optional[str] = None,
                 issue: Optional[str] = None,
                 value: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        self.issue = issue
        self.value = value

        context_dict = context or {}
        if operation:
            context_dict["Operation"] = operation
        if issue:
            context_dict["Issue"] = issue
        if value is not None:
            context_dict["Value"] = _summarize(value)

        super().__init__(message, details, context_dict)


# Helper functions for raising exceptions with consistent formatting

def raise_parameter_error(message: str,
                          param_name: Optional[str] = None,
                          param_value: Optional[Any] = None,
                          constraint: Optional[str] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a ParameterError with consistent formatting.

    Raises:
        ParameterError: Always
    """
    raise ParameterError(message, param_name, param_value, constraint, details, context)


def raise_dimension_error(message: str,
                          array_name: Optional[str] = None,
                          expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                          actual_shape: Optional[Tuple[int, ...]] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a DimensionError with consistent formatting.

    Raises:
        DimensionError: Always
    """
    raise DimensionError(message, array_name, expected_shape, actual_shape, details, context)


def raise_numeric_error(message: str,
                        operation: Optional[str] = None,
                        values: Optional[Any] = None,
                        error_type: Optional[str] = None,
                        details: Optional[str] = None,
                        context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a NumericError with consistent formatting.

    Raises:
        NumericError: Always
    """
    raise NumericError(message, operation, values, error_type, details, context)


def raise_data_error(message: str,
                     data_name: Optional[str] = None,
                     issue: Optional[str] = None,
                     index: Optional[Union[int, Tuple[int, ...], str]] = None,
                     details: Optional[str] = None,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a DataError with consistent formatting.

    Raises:
        DataError: Always
    """
    raise DataError(message, data_name, issue, index, details, context)


def warn_numeric(message: str,
                 operation: Optional[str] = None,
                 issue: Optional[str] = None,
                 value: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
    """Issue a NumericWarning with consistent formatting."""
    warnings.warn(
        NumericWarning(message, operation, issue, value, details, context),
        stacklevel=3
    )
