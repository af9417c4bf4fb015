"""
Veterinarian Model - Identity and credential record of a clinic veterinarian.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship

from ..database import Base

# Purposes a pending single-use token can be issued for
CONFIRMATION = "confirmation"
PASSWORD_RESET = "password_reset"


class Veterinarian(Base):
    """
    Veterinarian Model - Stores identity, profile and credential state

    Fields:
    - id: Primary key
    - email: Unique, lowercase email address used to log in
    - name, surname, address, phone: Profile fields
    - password_hash: bcrypt hash of the password
    - token: Single-use confirmation or reset token, empty when none is pending
    - token_purpose: What the pending token was issued for
    - confirmed: Whether the email address has been confirmed
    - is_active: Whether the account may be used
    - created_at, updated_at: Timestamps
    """
    __tablename__ = "veterinarians"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    surname = Column(String, nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    token = Column(String, nullable=True, index=True)
    token_purpose = Column(String, nullable=True)
    confirmed = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    patients = relationship("Patient", back_populates="veterinarian")

    def __repr__(self):
        """String representation of the Veterinarian model"""
        return f"<Veterinarian(id={self.id}, email='{self.email}', confirmed={self.confirmed})>"

    def issue_token(self, token: str, purpose: str) -> None:
        """Store a pending token, replacing whatever the slot held."""
        self.token = token
        self.token_purpose = purpose

    def clear_token(self) -> None:
        self.token = None
        self.token_purpose = None

    def confirm(self) -> None:
        """Consume the confirmation token and mark the email as confirmed."""
        self.clear_token()
        self.confirmed = True

    def holds_token(self, token: str, purpose: str) -> bool:
        """Whether the slot holds exactly this token, issued for this purpose."""
        return self.token is not None and self.token == token and self.token_purpose == purpose
