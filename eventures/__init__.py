"""
Top‑level package for the Eventures service.

The backend lives in ``eventures.app``; import the ASGI application as
``eventures.app.main:app``.  The HTTP client and the connection/session
driver used by remote clients are shipped as the top‑level modules
``eventures_api`` and ``eventures_client``.
"""

__all__ = []
