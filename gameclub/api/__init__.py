"""HTTP API: routers and request-scoped dependencies."""
