"""Shared base for persisted domain entities"""

from uuid import uuid4
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Primary keys are UUID4 strings"""
    return str(uuid4())


class BaseModel(SQLModel):
    pass
