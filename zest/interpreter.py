from __future__ import annotations

import logging
from typing import Optional, Union

from zest import ZestValue, Bindings
from zest import config
from zest.reader.lexer import lex
from zest.types.environment import Environment
from zest.types.values import to_value
from zest.evaluation.evaluator import Parser

logger = logging.getLogger(__name__)


def evaluate(
    source: str,
    env: Union[Bindings, Environment, None] = None,
    *,
    barewords: Optional[bool] = None,
) -> ZestValue:
    """Lex, parse and evaluate one Zest expression and return its value.

    `env` is a flat name -> value mapping (or a prebuilt Environment) that is
    read, never modified. With `barewords`, unknown words evaluate to their own
    text instead of being looked up; it defaults to ZEST_BAREWORDS.
    """
    if barewords is None:
        barewords = config.get_barewords()
    root = Environment.from_mapping(env)
    logger.debug("evaluate %r", source)
    parser = Parser(lex(source, barewords), max_depth=config.get_max_depth())
    return parser.parse(root)


class Interpreter:
    """
    Evaluates Zest expressions against a fixed base environment.
    The base environment is built once and only ever read, so one Interpreter
    can serve many (and concurrent) evaluations; nothing carries over between calls.
    """

    def __init__(
        self,
        env: Union[Bindings, Environment, None] = None,
        barewords: Optional[bool] = None,
    ):
        self.env: Environment = Environment.from_mapping(env)
        self.barewords = config.get_barewords() if barewords is None else barewords

    def eval(self, code: str) -> ZestValue:
        return evaluate(code, self.env, barewords=self.barewords)

    def with_bindings(self, **bindings: ZestValue) -> Interpreter:
        """Return an Interpreter whose base scope adds `bindings` on top of this one."""
        env = self.env
        for name, value in bindings.items():
            env = env.extend(name, to_value(value))
        return Interpreter(env, self.barewords)
