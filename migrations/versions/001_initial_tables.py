"""Create community management tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create community management tables"""

    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False, comment='Public identifier of the user'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('encrypted_password', sa.String(255), nullable=False),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False),

        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_user_id', 'users', ['user_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2. Create communities table
    op.create_table('communities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('community_id', sa.String(64), nullable=False, comment='Public identifier of the community'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('district', sa.String(255), nullable=False),

        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_communities_community_id', 'communities', ['community_id'], unique=True)

    # 3. Create community_admins link table
    op.create_table('community_admins',
        sa.Column('community_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),

        sa.PrimaryKeyConstraint('community_id', 'user_id'),
        sa.ForeignKeyConstraint(['community_id'], ['communities.community_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
    )

    # 4. Create community_houses table
    op.create_table('community_houses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('house_id', sa.String(64), nullable=False, comment='Public identifier of the house'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('community_id', sa.String(64), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['community_id'], ['communities.community_id']),
    )
    op.create_index('ix_community_houses_house_id', 'community_houses', ['house_id'], unique=True)
    op.create_index('ix_community_houses_community_id', 'community_houses', ['community_id'])

    # 5. Create house_member_documents table
    op.create_table('house_member_documents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('document_id', sa.String(64), nullable=False),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('content', sa.LargeBinary(), nullable=False),

        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_house_member_documents_document_id', 'house_member_documents', ['document_id'], unique=True)

    # 6. Create house_members table
    op.create_table('house_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.String(64), nullable=False, comment='Public identifier of the member'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('house_id', sa.String(64), nullable=True),
        sa.Column('document_id', sa.String(64), nullable=True),

        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('document_id'),
        sa.ForeignKeyConstraint(['house_id'], ['community_houses.house_id']),
        sa.ForeignKeyConstraint(['document_id'], ['house_member_documents.document_id']),
    )
    op.create_index('ix_house_members_member_id', 'house_members', ['member_id'], unique=True)
    op.create_index('ix_house_members_house_id', 'house_members', ['house_id'])


def downgrade() -> None:
    """Drop community management tables"""
    op.drop_index('ix_house_members_house_id', table_name='house_members')
    op.drop_index('ix_house_members_member_id', table_name='house_members')
    op.drop_table('house_members')

    op.drop_index('ix_house_member_documents_document_id', table_name='house_member_documents')
    op.drop_table('house_member_documents')

    op.drop_index('ix_community_houses_community_id', table_name='community_houses')
    op.drop_index('ix_community_houses_house_id', table_name='community_houses')
    op.drop_table('community_houses')

    op.drop_table('community_admins')

    op.drop_index('ix_communities_community_id', table_name='communities')
    op.drop_table('communities')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_user_id', table_name='users')
    op.drop_table('users')
