# expense_tracker/db/models.py — users, ledger entries and server-side sessions
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, Date, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base

# stored in users.password for accounts created through Google sign-in;
# it is not a valid hash so local login against it always fails
OAUTH_PASSWORD_SENTINEL = "google"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    # the username doubles as the account email
    username = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)

    transactions = relationship(
        "Transaction", back_populates="user", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {"id": self.id, "username": self.username, "password": self.password}


class Transaction(Base):
    __tablename__ = "expense_tracker"
    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=True)
    category = Column(String(255), nullable=True)
    # "income" or "expense" by convention; anything else is stored as given
    type = Column(String(50), nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="transactions")


class SessionRecord(Base):
    __tablename__ = "sessions"
    sid = Column(String(64), primary_key=True)
    data = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
