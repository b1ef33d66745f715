"""
Observability package - structured logging and tracing.
"""
