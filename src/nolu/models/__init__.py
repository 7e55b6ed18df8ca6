"""Domain dataclasses and pydantic API models."""
