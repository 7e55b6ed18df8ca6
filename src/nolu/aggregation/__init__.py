"""Aggregation module for account summaries.

- Reads an account's match set and produces its derived statistics
- Forbidden: HTTP concerns, partial/delta updates of stored summaries
"""
