"""Runtime environment for Zest.

An Environment is one immutable frame of bindings from names to evaluated
values, linked to the frame that encloses it via `outer`. Frames are never
mutated after construction: `let` builds a single-entry child frame with
`extend`, which is dropped once its body has been evaluated. Because nothing
writes to an existing frame, one base environment can be shared by any number
of evaluations, including concurrent ones.
"""

from __future__ import annotations

import logging
from io import StringIO
from types import MappingProxyType
from typing import Mapping, Optional

from zest import ZestValue
from zest.errors import ZestNameError
from zest.types.values import to_value

logger = logging.getLogger(__name__)


class Environment:
    """Immutable, parent-linked mapping from names to Zest values."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        bindings: Optional[Mapping[str, ZestValue]] = None,
        outer: Optional[Environment] = None,
    ):
        self.vars: Mapping[str, ZestValue] = MappingProxyType(dict(bindings or {}))
        self.outer: Optional[Environment] = outer

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, ZestValue]] = None) -> Environment:
        """Build a root frame from a flat name -> value mapping supplied by a caller.

        Values are checked to be booleans, numbers or strings; ints widen to floats.
        The mapping itself is copied and never written to.
        """
        if isinstance(mapping, Environment):
            return mapping
        bindings: dict[str, ZestValue] = {}
        for name, value in (mapping or {}).items():
            bindings[str(name)] = to_value(value)
        return cls(bindings)

    def extend(self, name: str, value: ZestValue) -> Environment:
        """Return a new child frame binding `name`; `self` is left untouched."""
        logger.debug("bind %s = %r (depth %d)", name, value, self.depth + 1)
        return Environment({name: value}, self)

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str, line: Optional[int] = None) -> ZestValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises ZestNameError if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise ZestNameError(f"undefined variable {name}", line)
        return env.vars[name]

    @property
    def depth(self) -> int:
        """Number of frames above this one."""
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return depth

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
