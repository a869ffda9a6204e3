"""
Pydantic schema definitions for API payloads.

Each domain (users, events) defines its own models for request and
response bodies.  JSON field names follow the camelCase used by the
clients; Python attributes stay snake_case through aliases.
"""
