"""Attribute keys reported to the RUM collector alongside resource events."""

TRACE_ID_KEY = "_dd.trace_id"
SPAN_ID_KEY = "_dd.span_id"
RULE_PSR_KEY = "_dd.rule_psr"
