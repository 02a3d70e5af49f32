"""
Validation decorators for curvelut builders.

Provides reusable validation logic for parameter checking across the fluent API.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from numbers import Real
from typing import Any, TypeAlias

# Type alias for callables
F: TypeAlias = Callable[..., Any]


def _get_value(args: tuple, kwargs: dict, param_name: str, param_index: int) -> tuple[bool, Any]:
    """Fetch the validated argument from args or kwargs."""
    if len(args) > param_index:
        return True, args[param_index]
    if param_name in kwargs:
        return True, kwargs[param_name]
    return False, None


def _as_tuple(expected_type: type | tuple[type, ...]) -> tuple[type, ...]:
    return expected_type if isinstance(expected_type, tuple) else (expected_type,)


def validate_range(
    min_val: int | float,
    max_val: int | float,
    param_name: str = "value",
    param_index: int = 1,
    error: type[Exception] = ValueError,
) -> Callable[[F], F]:
    """
    Decorator for validating numeric parameter ranges.

    Args:
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 1 = first arg after self)
        error: Exception class raised when the value is out of range

    Returns:
        Decorated function with range validation

    Example:
        >>> @validate_range(0, 2, 'plane', error=PlaneIndexOutOfRangeError)
        ... def curve(self, plane: int, points) -> Self:
        ...     self._curves[plane] = points
        ...     return self
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _get_value(args, kwargs, param_name, param_index)
            if not found:
                # No value provided, let function handle it
                return func(*args, **kwargs)

            if isinstance(value, bool) or not isinstance(value, Real):
                raise TypeError(
                    f"{param_name} must be a number, got {type(value).__name__}. "
                    f"Provide a numeric value (int or float)."
                )

            if not min_val <= value <= max_val:
                suggestion = ""
                if param_name == "plane":
                    suggestion = " Use 0, 1 or 2; the master curve has its own setter."

                raise error(
                    f"{param_name}={value} is outside valid range [{min_val}, {max_val}].{suggestion}"
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_type(
    expected_type: type | tuple[type, ...],
    param_name: str = "value",
    param_index: int = 1,
    error: type[Exception] = TypeError,
) -> Callable[[F], F]:
    """
    Decorator for validating parameter types.

    Args:
        expected_type: Expected type or tuple of types
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature
        error: Exception class raised on a type mismatch

    Returns:
        Decorated function with type validation

    Example:
        >>> @validate_type((Integral, str), 'preset', error=InvalidPresetError)
        ... def preset(self, preset: int | str) -> Self:
        ...     self._preset = preset
        ...     return self
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            found, value = _get_value(args, kwargs, param_name, param_index)
            if not found:
                return func(*args, **kwargs)

            # bool is an int subclass; accept it only when listed explicitly
            is_stray_bool = isinstance(value, bool) and bool not in _as_tuple(expected_type)
            if is_stray_bool or not isinstance(value, expected_type):
                if isinstance(expected_type, tuple):
                    type_names = ", ".join(t.__name__ for t in expected_type)
                    raise error(
                        f"{param_name} must be one of ({type_names}), got {type(value).__name__}"
                    )
                else:
                    raise error(
                        f"{param_name} must be {expected_type.__name__}, got {type(value).__name__}"
                    )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
