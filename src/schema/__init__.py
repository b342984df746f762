"""Temporal field schema layer.

This package maps document types to the paths of their temporal fields.
It also resolves those paths against concrete documents.
"""
