"""
Case-insensitive contributor identity canonicalization.
"""
from typing import Dict, Optional
from normalize.models import ContributorIdentity


def identity_key(email: str) -> str:
    """Return the comparison key for an email-like identity."""
    return (email or '').strip().lower()


class IdentityRegistry:
    """
    Lookup table from lower-cased key to ContributorIdentity.
    The first display string registered for a key is kept for the whole run.
    """

    def __init__(self):
        self._by_key: Dict[str, ContributorIdentity] = {}

    def register(self, email: str) -> Optional[ContributorIdentity]:
        key = identity_key(email)
        if not key:
            return None
        identity = self._by_key.get(key)
        if identity is None:
            identity = ContributorIdentity(key, email.strip())
            self._by_key[key] = identity
        return identity

    def canonical(self, email: str) -> Optional[ContributorIdentity]:
        """Return the registered identity, registering unseen emails on the fly."""
        identity = self._by_key.get(identity_key(email))
        if identity is not None:
            return identity
        return self.register(email)

