import secrets
import string
import uuid

# Same alphabet as nanoid: URL-safe
SHORT_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_short_id(size: int = 4) -> str:
    """Id corto y legible para médicos y estudios"""
    return "".join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(size))


def generate_uuid() -> str:
    return str(uuid.uuid4())
