"""Infrastructure: persistence, auth primitives and the HTTP API."""
