"""Shared primitives: configuration, error codes, response envelopes and field-name mapping."""
