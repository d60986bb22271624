"""
API routes module.

FastAPI routers and dependencies for all HTTP endpoints.
"""
