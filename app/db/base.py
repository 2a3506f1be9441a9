import uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_uuid() -> str:
    """Primary keys for everything except users are random UUID strings."""
    return str(uuid.uuid4())
