"""HTTP API: FastAPI app, routes, schemas and middleware."""
