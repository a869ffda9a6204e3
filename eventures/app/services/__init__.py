"""
Service layer.

Each service encapsulates business logic for a domain.  Services take
the calling principal as an explicit argument and report expected
outcomes as result variants from ``results`` instead of raising.
"""
