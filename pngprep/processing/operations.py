"""
Operation registry for pngprep.

Each pixel transform registers itself here under an Operation member.
Exactly one operation runs per invocation.

To add a new operation:
1. Add a member to Operation
2. Create a function with signature: func(pixels: np.ndarray) -> np.ndarray
3. Register it with the @register_operation decorator

All operations receive an HxWx4 uint8 RGBA array and must return a new
array of the same shape and dtype, leaving the input untouched.
"""

from enum import Enum
from typing import Callable, Dict, Any

import numpy as np


class Operation(Enum):
    """Pixel transforms selectable per run."""
    DILATE = "dilate"
    PREMULTIPLY = "premul"

    @classmethod
    def parse(cls, value: "Operation | str") -> "Operation":
        """
        Resolve an Operation from a member, its value or its name.

        Raises:
            ValueError: If the value doesn't name an operation
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for op in cls:
            if key in (op.value, op.name.lower()):
                return op
        raise ValueError(
            f"Unknown operation: {value}. Available: {[op.value for op in cls]}"
        )


# Registry of available operations
_OPERATIONS: Dict[Operation, Dict[str, Any]] = {}


def register_operation(operation: Operation, description: str = ""):
    """Decorator to register a pixel transform for an operation."""
    def decorator(func: Callable):
        _OPERATIONS[operation] = {
            'func': func,
            'description': description,
        }
        return func
    return decorator


def get_operations() -> list:
    """Return list of registered operations."""
    return list(_OPERATIONS.keys())


def get_operation(operation: Operation | str) -> Callable:
    """Get the transform function for an operation."""
    op = Operation.parse(operation)
    if op not in _OPERATIONS:
        raise ValueError(
            f"Unknown operation: {op.value}. "
            f"Available: {[o.value for o in get_operations()]}"
        )
    return _OPERATIONS[op]['func']


def describe_operation(operation: Operation | str) -> str:
    """Get the one-line description an operation was registered with."""
    get_operation(operation)
    return _OPERATIONS[Operation.parse(operation)]['description']


def apply_operation(operation: Operation | str, pixels: np.ndarray) -> np.ndarray:
    """Apply a named operation to an RGBA pixel array."""
    func = get_operation(operation)
    return func(pixels)
