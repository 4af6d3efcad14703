# Models package init
"""
Notes API — ORM Models
========================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and by the test suite's create_all).
"""

from app.models.note import Note
from app.models.user import User

__all__ = ["Note", "User"]
