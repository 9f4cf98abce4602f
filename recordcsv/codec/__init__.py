"""
Delimited text codec: write path, lazy read path, untyped table variant and
scalar coercion.
"""
