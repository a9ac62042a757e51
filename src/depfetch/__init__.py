"""
depfetch - recursive source dependency fetcher

Reads feature-gated dependency manifests, fetches every dependency at its
pinned revision into a local workspace and repeats for each fetched
dependency until the whole transitive graph is materialized.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
