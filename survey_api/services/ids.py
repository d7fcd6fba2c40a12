import secrets

# Digits and letters without the look-alikes 0, O, I and l.
ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
DEFAULT_SIZE = 10


def generate_id(size: int = DEFAULT_SIZE) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(size))
