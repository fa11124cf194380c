"""
Command-line interface for clipstats.
"""
