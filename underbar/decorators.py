"""
Function decorators: once, memoize, delay and throttle.

Each decorator call builds a fresh state object and closes over it, so two
wrappers of the same function never share anything. The state is also
attached to the returned callable as ``wrapper.state`` for inspection.
"""

import asyncio
import functools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .models import TimerOptions

logger = logging.getLogger(__name__)

Scheduler = Callable[..., Any]


def _name(func) -> str:
    return getattr(func, "__name__", repr(func))


# ---------- timer facility ----------

def call_later(seconds: float, callback: Callable, *args):
    """Run ``callback(*args)`` after ``seconds`` without blocking the caller.

    Inside a running asyncio event loop the callback is queued on that loop,
    so it runs on a later turn of the same thread. Outside of one, a daemon
    ``threading.Timer`` fires it instead. Returns the underlying handle.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(seconds, callback, args=args)
        timer.daemon = True
        timer.start()
        return timer
    return loop.call_later(seconds, callback, *args)


# ---------- once ----------

@dataclass
class OnceState:
    """Called-flag and cached result of a once() wrapper"""
    called: bool = False
    result: Any = None


def once(func: Callable) -> Callable:
    """Return a function that runs ``func`` on its first call only.

    Every later call, whatever its arguments, returns the first result. If
    the first call raises, nothing is cached and the next call tries again.
    """
    state = OnceState()

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not state.called:
            state.result = func(*args, **kwargs)
            state.called = True
        return state.result

    wrapper.state = state
    return wrapper


# ---------- memoize ----------

def string_key(*args) -> str:
    """Cache key made of the arguments' string forms joined by commas.

    ``1`` and ``"1"`` (or ``[1, 2]`` and ``"[1, 2]"``) produce the same key.
    """
    return ",".join(str(arg) for arg in args)


def structural_key(*args) -> tuple:
    """Type-preserving cache key: ``1``, ``"1"``, ``1.0`` and ``True`` all differ."""
    return tuple((type(arg).__qualname__, repr(arg)) for arg in args)


@dataclass
class MemoizeState:
    """Result table of a memoize() wrapper. Grows without bound."""
    cache: Dict[Any, Any] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0


def memoize(func: Callable, hasher: Optional[Callable[..., Any]] = None) -> Callable:
    """Cache ``func``'s results per argument list.

    Intended for functions of primitive positional arguments. The key is
    ``hasher(*args)``, by default ``string_key``; pass ``structural_key`` when
    arguments that print alike must not share an entry.
    """
    key_for = hasher or string_key
    state = MemoizeState()

    @functools.wraps(func)
    def wrapper(*args):
        key = key_for(*args)
        if key in state.cache:
            state.hits += 1
            return state.cache[key]
        state.misses += 1
        logger.debug(f"memoize: computing {_name(func)} for key {key!r}")
        state.cache[key] = func(*args)
        return state.cache[key]

    wrapper.state = state
    wrapper.cache = state.cache
    return wrapper


# ---------- delay ----------

def delay(func: Callable, wait: float, *args, scheduler: Optional[Scheduler] = None) -> None:
    """Call ``func(*args)`` once, no sooner than ``wait`` milliseconds from now.

    Fire and forget: nothing is returned and the call cannot be cancelled.
    """
    options = TimerOptions(wait_ms=wait)
    schedule = scheduler or call_later
    logger.debug(f"delay: {_name(func)!r} scheduled in {options.wait_ms}ms")
    schedule(options.seconds, func, *args)


# ---------- throttle ----------

@dataclass
class ThrottleState:
    """Cooling flag and bookkeeping of a throttle() wrapper"""
    cooling: bool = False
    result: Any = None
    invocations: int = 0
    dropped: int = 0


def throttle(func: Callable, wait: float, scheduler: Optional[Scheduler] = None) -> Callable:
    """Return a function that runs ``func`` at most once per ``wait`` milliseconds.

    The first call runs immediately and starts a cooling window. Calls made
    while cooling are dropped (they return the last result and are never
    replayed). Once ``wait`` has elapsed, the next call runs and starts a new
    window.
    """
    options = TimerOptions(wait_ms=wait)
    schedule = scheduler or call_later
    state = ThrottleState()

    def cool_down():
        state.cooling = False
        logger.debug(f"throttle: {_name(func)} ready again")

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if state.cooling:
            state.dropped += 1
            logger.debug(f"throttle: dropped call to {_name(func)} while cooling")
            return state.result
        state.cooling = True
        # cooling must end even if func raises
        schedule(options.seconds, cool_down)
        state.invocations += 1
        state.result = func(*args, **kwargs)
        return state.result

    wrapper.state = state
    return wrapper
