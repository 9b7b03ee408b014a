# auth/models.py
"""
Modelos de médico (usuário) e seus endereços de atendimento
"""

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship

from database.connection import Base
from utils.timezone import get_utc_now


class User(Base):
    """Médico cadastrado no sistema"""

    __tablename__ = "users"
    __table_args__ = (
        # Mesmo CRM pode existir em UFs diferentes
        UniqueConstraint("crm", "crm_uf", name="uq_users_crm_crm_uf"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone_number = Column(String(20), nullable=False)  # só dígitos
    crm = Column(String(6), nullable=False, index=True)
    crm_uf = Column(String(2), nullable=False)
    password = Column(String(255), nullable=False)  # hash bcrypt
    terms_accepted = Column(Boolean, nullable=False, default=False)
    terms_accepted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=get_utc_now)
    updated_at = Column(DateTime(timezone=True), default=get_utc_now, onupdate=get_utc_now)

    addresses = relationship(
        "Address",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Address.id",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', crm='{self.crm}/{self.crm_uf}')>"


class Address(Base):
    """Local de atendimento do médico"""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    location_name = Column(String(255), nullable=False)
    full_address = Column(Text, nullable=False)
    complement = Column(String(255), nullable=True)
    cep = Column(String(8), nullable=False)  # só dígitos
    created_at = Column(DateTime(timezone=True), default=get_utc_now)

    user = relationship("User", back_populates="addresses")

    def __repr__(self):
        return f"<Address(id={self.id}, user_id={self.user_id}, cep='{self.cep}')>"
