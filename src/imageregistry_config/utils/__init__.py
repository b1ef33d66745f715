"""
Utilities package - field-level validation helpers.
"""
