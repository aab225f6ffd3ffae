"""Password hashing with bcrypt."""

import bcrypt

BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of its input; bcrypt>=5 refuses longer input
MAX_PASSWORD_BYTES = 72


def exceeds_bcrypt_limit(password: str) -> bool:
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check a plaintext password against a bcrypt hash.

    bcrypt.checkpw compares in constant time. A missing or malformed hash,
    or a password bcrypt cannot hash, never verifies.
    """
    if not plain or not hashed or exceeds_bcrypt_limit(plain):
        return False
    try:
        return bcrypt.checkpw(plain.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        return False
