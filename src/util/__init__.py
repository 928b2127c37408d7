"""
Shared utilities: logging, HTTP helpers, dates and error tracking.
"""
