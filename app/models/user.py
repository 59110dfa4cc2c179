"""
User model for authentication.

Users are keyed by username. ``is_admin`` gates the write routes for
companies and jobs.
"""

from sqlalchemy import Column, String, Text, Boolean, false
from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True, index=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
