"""
deepsum: Deterministic recursive file hashing with manifest auditing.

Hashes every regular file under a directory tree in lexicographic order and
reconciles the result against a previously captured manifest.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
