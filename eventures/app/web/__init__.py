"""Server‑rendered HTML pages for managing events in a browser."""
