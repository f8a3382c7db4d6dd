# Core type aliases for Zest's data model.
# Runtime values are plain Python types: bool, float and str. There is no
# wrapper class; the kind of a value is decided by `zest.types.values.kind_of`.
#
# Naming guidance:
# - ZestValue: an evaluated value (boolean, number or string).
# - Bindings:  a flat, read-only mapping supplied by a caller as the initial scope.

from typing import Mapping, Union

ZestValue = Union[bool, float, str]
Bindings = Mapping[str, ZestValue]

from zest.interpreter import evaluate, Interpreter  # noqa: E402

__all__ = ["ZestValue", "Bindings", "evaluate", "Interpreter"]
