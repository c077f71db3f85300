"""HTTP routers package."""
