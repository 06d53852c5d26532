"""Thread-safe and fork-safe random source for trace identifiers and sampling draws.

Each thread owns its own ``random.Random`` instance seeded from ``os.urandom``
so concurrent requests never share generator state. Forked children drop the
inherited generators and reseed lazily.
"""
import os
import random
import threading


_local = threading.local()


def _generator():
    # type: () -> random.Random
    gen = getattr(_local, "gen", None)
    if gen is None:
        gen = random.Random(os.urandom(16))
        _local.gen = gen
    return gen


def rand63bits():
    # type: () -> int
    """Return a uniformly distributed 63-bit integer (bit 63 always clear)."""
    return _generator().getrandbits(63)


def random_percent():
    # type: () -> float
    """Return a uniformly distributed float in ``[0, 100)``."""
    return _generator().random() * 100.0


def _reset_generators():
    # type: () -> None
    global _local
    _local = threading.local()


if hasattr(os, "register_at_fork"):
    os.register_at_fork(after_in_child=_reset_generators)
