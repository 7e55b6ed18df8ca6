"""Persistence layer: schema, sessions and repository.

Only the repository issues queries; everything above it works with the
dataclasses in nolu.models.domain.
"""
