"""
Application package initializer.

The backend is split into ``core`` (configuration, logging, database
and security), ``schemas`` (API payloads), ``services`` (business
logic), ``api`` (versioned JSON routes) and ``web`` (server‑rendered
pages).

Import the ASGI application from ``eventures.app.main``.
"""
