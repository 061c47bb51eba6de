"""Shared base for domain entities"""

from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all SQLModel domain entities"""
    pass
