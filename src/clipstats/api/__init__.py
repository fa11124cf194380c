"""HTTP API for clipstats."""
