"""Identity and credential helpers."""
