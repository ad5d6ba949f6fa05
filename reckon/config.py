from __future__ import annotations
import os


DEFAULT_MAX_CALL_DEPTH = 5000


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_call_depth() -> int:
    return int_from_env('RECKON_MAX_CALL_DEPTH', DEFAULT_MAX_CALL_DEPTH)


# Python frames a single user call can occupy (evaluator, call engine and
# the special forms in between), plus room for the host's own stack.
FRAMES_PER_CALL = 16
STACK_HEADROOM = 1000


def get_recursion_limit() -> int:
    """Python recursion limit needed to reach the maximum call depth."""
    return get_max_call_depth() * FRAMES_PER_CALL + STACK_HEADROOM
