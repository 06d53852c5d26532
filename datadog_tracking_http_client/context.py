from typing import Optional

import attr


@attr.s(frozen=True, slots=True)
class TraceContext(object):
    """Trace identifiers and sampling decision propagated with a single HTTP request.

    ``trace_id`` and ``span_id`` are ``None`` for an explicitly unsampled
    context extracted from headers such as ``b3: 0``.
    """

    trace_id = attr.ib(default=None, type=Optional[int])
    span_id = attr.ib(default=None, type=Optional[int])
    sampled = attr.ib(default=True, type=bool)

    @property
    def has_ids(self):
        # type: () -> bool
        return self.trace_id is not None and self.span_id is not None
