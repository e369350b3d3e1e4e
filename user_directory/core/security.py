from passlib.context import CryptContext
# Here we handle password security. Plaintext passwords are hashed once and then thrown away;
# later checks compare a candidate plaintext against the stored hash.

DEFAULT_BCRYPT_ROUNDS = 10


class PasswordHasher:
    """One-way bcrypt hashing with a random per-hash salt."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        # Password hashing context. bcrypt generates a fresh salt on every hash() call.
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        # A corrupt or foreign hash string is a failed match, not a crash
        try:
            return self.context.verify(plain_password, hashed_password)
        except ValueError:
            return False
