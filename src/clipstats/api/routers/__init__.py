"""API routers for clipstats."""
