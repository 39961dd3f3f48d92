"""Derived planner logic.

Subpackages:
- shopping: building shopping lists from a week
- reporting: nutrition aggregation
"""
__all__ = ["shopping", "reporting"]
