"""
Pydantic schema definitions for API payloads.

Each domain (series, auth, watched items) defines its own Pydantic
models for request and response bodies.  Request models are lenient
(missing values fall back to empty defaults) so that the normalizer,
not the parser, decides what is acceptable and words the message.
"""

# Upper bound for ids and numbers; matches SQLite's signed 64-bit INTEGER.
MAX_INT64 = 2**63 - 1
