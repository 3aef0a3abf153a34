"""
LMS Seeder - Password hashing
"""
from passlib.context import CryptContext

DEFAULT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=DEFAULT_ROUNDS)


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    if rounds == DEFAULT_ROUNDS:
        return pwd_context.hash(plain)
    return pwd_context.copy(bcrypt__rounds=rounds).hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)
