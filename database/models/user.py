import uuid

from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class User(Base):
    """
    Account row. Profile, persona and social data live in their own tables
    and may be missing for a given user.
    """
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    first_name = Column(Text)
    last_name = Column(Text)
    avatar_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    persona = relationship("IdealPersona", back_populates="user", uselist=False, cascade="all, delete-orphan")
    social = relationship("SocialProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")


class UserProfile(Base):
    """Published profile. Owned by the profile service; read-only here."""
    __tablename__ = 'user_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    headline = Column(Text)
    bio = Column(Text)
    city = Column(Text)
    state = Column(Text)
    country = Column(Text)
    latitude = Column(Float)
    longitude = Column(Float)
    profession = Column(Text)
    company = Column(Text)
    skills = Column(JSONType, default=list)
    interests = Column(JSONType, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")


class IdealPersona(Base):
    """What the user is looking for in a match."""
    __tablename__ = 'ideal_personas'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    match_type = Column(Text)  # COMPLEMENT | MIRROR
    skills_desired = Column(JSONType, default=list)
    industry_preferences = Column(JSONType, default=list)
    experience_level_preference = Column(Text)  # ENTRY_LEVEL | MID_LEVEL | SENIOR | EXECUTIVE | ANY

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="persona")


class SocialProfile(Base):
    """Signals imported from social networks (e.g. the LinkedIn industry)."""
    __tablename__ = 'social_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    industry = Column(Text)

    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="social")

    __table_args__ = (
        Index('idx_social_profiles_industry', 'industry'),
    )
