"""Directory traversal producing a lazy, depth-first sequence of tree nodes.

This package provides the walker that enumerates a directory subtree, applies
exclusion rules and a depth ceiling, and optionally attaches file contents to
the nodes it yields.
"""
