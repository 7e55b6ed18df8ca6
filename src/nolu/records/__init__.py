"""Match record mutations.

Every mutation of an account's match set rebuilds its summary in the same
transaction.
"""
