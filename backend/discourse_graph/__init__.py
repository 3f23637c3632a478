"""
discourse_graph - typed discourse graph core.

Node and relation type registry, title format engine, node shape sizing,
canvas shape migrations and frontmatter relation sync.
"""

__version__ = "0.1.0"
