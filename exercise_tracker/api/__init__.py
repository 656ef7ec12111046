"""API Layer — FastAPI routes, service dependencies, and error handlers."""
