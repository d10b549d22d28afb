"""
Text index and fuzzy matching package.

This package provides the pure-Python search stack:
- schema: Indexed field declarations and weight normalization
- fuzzy: Approximate substring distance and the weighted record matcher
- models: Search result containers
- text_index: Per-subject document index over RDF quads
"""
