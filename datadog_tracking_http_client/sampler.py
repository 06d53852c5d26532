"""Samplers decide, per first-party request, whether to propagate a trace and whether it is kept.

Two independent decisions are made for every request:

- ``traced``: a random draw against the global trace sample rate decides
  whether tracing headers are attached at all.
- ``sampled``: the RUM collector's own rule (``should_sample_trace()``)
  decides the sampling priority carried by those headers.

The collector's tracing sample rate is always reported as ``rule_psr`` so the
backend can extrapolate, whatever the outcome of either decision.
"""
import attr

from .internal.logger import get_logger
from .internal.rand import random_percent


log = get_logger(__name__)


@attr.s(frozen=True, slots=True)
class SamplingDecision(object):
    traced = attr.ib(type=bool)
    sampled = attr.ib(type=bool)
    rule_psr = attr.ib(type=float)


def rule_psr(rum):
    # type: (...) -> float
    """Convert the collector's tracing sample rate (percent) into a ratio in ``[0, 1]``."""
    return min(1.0, max(0.0, float(rum.tracing_sampling_rate) / 100.0))


class TraceSampler(object):
    """Sampler based on a rate

    Trace (``sample_rate``)% of the first-party requests. ``sample_rate`` is a
    percentage clamped between 0 and 100 inclusive.
    """

    def __init__(self, sample_rate=100.0):
        # type: (float) -> None
        self.sample_rate = float(min(100.0, max(0.0, sample_rate)))

    def __repr__(self):
        return "{}(sample_rate={!r})".format(self.__class__.__name__, self.sample_rate)

    def decide(self, rum):
        # type: (...) -> SamplingDecision
        traced = random_percent() < self.sample_rate
        sampled = bool(rum.should_sample_trace())
        decision = SamplingDecision(traced=traced, sampled=sampled, rule_psr=rule_psr(rum))
        log.debug("sampling decision %r with %r", decision, self)
        return decision
