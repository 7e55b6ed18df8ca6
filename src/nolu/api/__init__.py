"""API module for Nolu.

- Validates inputs, reads/writes DB through the domain services
- Returns payloads for the dashboard and public lookup UI
- Forbidden: statistics arithmetic (lives in nolu.aggregation)
"""
