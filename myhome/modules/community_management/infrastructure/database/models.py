# 📄 File: myhome/modules/community_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how communities, houses, residents, documents and users are laid out in
# the database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the community hierarchy. Every table has an internal
# integer primary key plus a unique string identifier used by the domain. Child rows
# reference their parent's string identifier; collections on the parent side are
# read-only so saving a parent never rewrites its children.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - myhome.shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - *_repository_impl.py (CRUD operations)
# - migrations (schema generation)

"""
SQLAlchemy Models for Community Management

Models:
- UserModel: accounts that can administer communities
- CommunityModel: communities, with the admin link table ``community_admins``
- CommunityHouseModel: houses, each owned by one community
- HouseMemberModel: residents, optionally housed and optionally documented
- HouseMemberDocumentModel: uploaded identity documents
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
)
from sqlalchemy.orm import relationship

from myhome.shared.infrastructure.database.connection import Base


# =============================================================================
# ADMIN LINK TABLE
# =============================================================================

community_admins = Table(
    "community_admins",
    Base.metadata,
    Column(
        "community_id",
        String(64),
        ForeignKey("communities.community_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String(64),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """Accounts known to community management."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="Public identifier of the user"
    )
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    encrypted_password = Column(String(255), nullable=False, default="")
    email_confirmed = Column(Boolean, nullable=False, default=False)

    # Inverse side of CommunityModel.admins; the link is written from the community
    communities = relationship(
        "CommunityModel",
        secondary=community_admins,
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<UserModel(user_id={self.user_id}, email={self.email})>"


# =============================================================================
# COMMUNITY MODEL
# =============================================================================

class CommunityModel(Base):
    """Residential communities."""
    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    community_id = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="Public identifier of the community"
    )
    name = Column(String(255), nullable=False)
    district = Column(String(255), nullable=False)

    admins = relationship(
        "UserModel",
        secondary=community_admins,
        order_by="UserModel.id",
        passive_deletes=True,
        lazy="raise",
    )
    houses = relationship(
        "CommunityHouseModel",
        order_by="CommunityHouseModel.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<CommunityModel(community_id={self.community_id}, name={self.name})>"


# =============================================================================
# HOUSE MODEL
# =============================================================================

class CommunityHouseModel(Base):
    """Houses; the owning community never changes after insert."""
    __tablename__ = "community_houses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    house_id = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="Public identifier of the house"
    )
    name = Column(String(255), nullable=False)
    community_id = Column(
        String(64),
        ForeignKey("communities.community_id"),
        nullable=False,
        index=True,
    )

    members = relationship(
        "HouseMemberModel",
        order_by="HouseMemberModel.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<CommunityHouseModel(house_id={self.house_id}, community_id={self.community_id})>"


# =============================================================================
# MEMBER AND DOCUMENT MODELS
# =============================================================================

class HouseMemberDocumentModel(Base):
    """Identity documents; rows outlive the member link."""
    __tablename__ = "house_member_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(64), unique=True, nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    content = Column(LargeBinary, nullable=False)


class HouseMemberModel(Base):
    """Residents. ``house_id`` is NULL for unhoused members."""
    __tablename__ = "house_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="Public identifier of the member"
    )
    name = Column(String(255), nullable=False)
    house_id = Column(
        String(64),
        ForeignKey("community_houses.house_id"),
        nullable=True,
        index=True,
    )
    document_id = Column(
        String(64),
        ForeignKey("house_member_documents.document_id"),
        nullable=True,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<HouseMemberModel(member_id={self.member_id}, house_id={self.house_id})>"
