"""
Signal Engine Errors / 信号引擎异常

Error taxonomy raised at the entry of every transformation.
所有变换在入口处抛出的异常分类。
"""

import math
import numbers


class SignalError(ValueError):
    """Base class for all engine failures / 引擎异常基类"""

    kind = "SignalError"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.kind}: {self.message}"


class InvalidParameter(SignalError):
    """Non-positive frequency/amplitude/rate or out-of-range config value."""

    kind = "InvalidParameter"


class InvalidInput(SignalError):
    """Empty or malformed bit string / 比特串为空或含非法字符"""

    kind = "InvalidInput"


class UnsupportedScheme(SignalError):
    """Selector value the engine does not implement."""

    kind = "UnsupportedScheme"


def require_positive(name, value):
    """Raise InvalidParameter unless value is a finite real number > 0."""
    if (isinstance(value, bool) or not isinstance(value, numbers.Real)
            or not math.isfinite(value) or value <= 0):
        raise InvalidParameter(f"{name} must be a finite number > 0, got {value!r}")
    return value
