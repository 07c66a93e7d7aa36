"""Password hashing utility using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
which is the winner of the Password Hashing Competition and recommended by OWASP.
Hashing is CPU-bound, so the async helpers run it in the thread pool.
"""

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from starlette.concurrency import run_in_threadpool

DUMMY_PASSWORD = "nutrilens-dummy-password"


@lru_cache
def dummy_hash_for(time_cost: int) -> str:
    """Return a hash of a throwaway password made with the given cost.

    Verified against when a login email is unknown, so that both failure
    paths cost one hash verification with the configured parameters.
    """
    return PasswordHasher(time_cost=time_cost).hash(DUMMY_PASSWORD)


class CredentialHasher:
    """Argon2id password hasher with a configurable cost.

    Args:
        hash_cost: Argon2 time cost (number of iterations).
    """

    def __init__(self, hash_cost: int = 3) -> None:
        self._hasher = PasswordHasher(time_cost=hash_cost)

    @property
    def hash_cost(self) -> int:
        return self._hasher.time_cost

    @property
    def dummy_hash(self) -> str:
        return dummy_hash_for(self._hasher.time_cost)

    def hash(self, password: str) -> str:
        """Hash a password using Argon2id.

        Example:
            >>> hashed = CredentialHasher().hash("Str0ng!Pass")
            >>> hashed.startswith("$argon2id$")
            True
        """
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Uses constant-time comparison. Malformed hashes verify as False.

        Example:
            >>> hasher = CredentialHasher()
            >>> hasher.verify("Str0ng!Pass", hasher.hash("Str0ng!Pass"))
            True
        """
        try:
            return self._hasher.verify(hashed, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a hash was produced with different parameters.

        Should be called after successful verification; if True, the
        password should be rehashed with the current parameters.
        """
        try:
            return self._hasher.check_needs_rehash(hashed)
        except InvalidHashError:
            return True

    async def hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, password, hashed)

    async def verify_dummy_async(self, password: str) -> bool:
        """Verify against the dummy hash. Always False, same cost as a real check."""
        return await run_in_threadpool(lambda: self.verify(password, self.dummy_hash))
