"""Geometry, bounds, rotation and extraction primitives for crop sessions."""
