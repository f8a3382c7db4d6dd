from zest.types.values import kind_of, to_text, unary, binary
from zest.types.environment import Environment

__all__ = ["kind_of", "to_text", "unary", "binary", "Environment"]
