"""Directory-level time shifting.

This package reads and writes document files, applies shift plans to
whole directory trees, and tracks per-directory anchor dates.
"""
