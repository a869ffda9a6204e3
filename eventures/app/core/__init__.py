"""Infrastructure shared by every part of the backend."""
