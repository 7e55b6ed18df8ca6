"""Account lifecycle: registration, login, tokens, privacy, deletion."""
