"""
Tests package - test suite for the registry configuration model.

Contains:
- unit/: Unit tests for individual components
- fixtures/: Sample configuration documents
"""
