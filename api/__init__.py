"""api — FastAPI routers, dependencies and exception handlers."""
