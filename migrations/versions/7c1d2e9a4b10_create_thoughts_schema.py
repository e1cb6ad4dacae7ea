"""create_thoughts_schema

Revision ID: 7c1d2e9a4b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "7c1d2e9a4b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create profiles, thoughts, follows and notifications.

    Every foreign key to profiles.id cascades on update so a profile can be
    re-keyed to a new auth user id with a single UPDATE.
    """
    # --- profiles ---
    # No foreign key to auth.users: an orphaned profile outlives its old
    # auth user until it is re-keyed.
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("handle", sa.String(length=80), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column(
            "bookmarked_ids",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("joined_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.PrimaryKeyConstraint("id", name="profiles_pkey"),
    )
    op.create_index(
        "uq_profiles_handle_lower",
        "profiles",
        [sa.text("lower(handle)")],
        unique=True,
    )
    op.create_index(
        "uq_profiles_email",
        "profiles",
        [sa.text("lower(email)")],
        unique=True,
    )

    # --- thoughts ---
    op.create_table(
        "thoughts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.String(length=280), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.CheckConstraint(
            "length(content) BETWEEN 1 AND 280", name="ck_thoughts_content_length"
        ),
        sa.ForeignKeyConstraint(
            ["author_id"], ["profiles.id"], ondelete="CASCADE", onupdate="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_thoughts_author_id", "thoughts", ["author_id"])
    op.create_index("ix_thoughts_created_at", "thoughts", [sa.text("created_at DESC")])

    # --- follows ---
    op.create_table(
        "follows",
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("following_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.CheckConstraint("follower_id <> following_id", name="ck_follows_no_self"),
        sa.ForeignKeyConstraint(
            ["follower_id"], ["profiles.id"], ondelete="CASCADE", onupdate="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["following_id"], ["profiles.id"], ondelete="CASCADE", onupdate="CASCADE"
        ),
        sa.PrimaryKeyConstraint("follower_id", "following_id"),
    )
    op.create_index("ix_follows_following_id", "follows", ["following_id"])

    # --- notifications ---
    op.create_table(
        "notifications",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("subject_ref", sa.UUID(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.CheckConstraint("kind IN ('follow', 'bookmark')", name="ck_notifications_kind"),
        sa.ForeignKeyConstraint(
            ["recipient_id"], ["profiles.id"], ondelete="CASCADE", onupdate="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["sender_id"], ["profiles.id"], ondelete="CASCADE", onupdate="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_notifications_dedup",
        "notifications",
        ["recipient_id", "sender_id", "kind", "created_at"],
    )
    op.create_index(
        "idx_notifications_unread",
        "notifications",
        ["recipient_id"],
        postgresql_where=sa.text("is_read = false"),
    )

    _enable_rls()


def _enable_rls() -> None:
    """Owner-only Row Level Security for direct Supabase client access.

    The API connects with a role that bypasses RLS; these policies guard the
    tables when the browser talks to Supabase directly.
    """
    for table in ["profiles", "thoughts", "follows", "notifications"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- profiles: public read, owner write ---
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (id = (SELECT auth.uid()));
    """)

    # --- thoughts: public read, author insert/delete ---
    op.execute("""
        CREATE POLICY thoughts_select ON thoughts
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY thoughts_insert ON thoughts
            FOR INSERT WITH CHECK (author_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY thoughts_delete ON thoughts
            FOR DELETE USING (author_id = (SELECT auth.uid()));
    """)

    # --- follows: public read, follower insert/delete ---
    op.execute("""
        CREATE POLICY follows_select ON follows
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY follows_insert ON follows
            FOR INSERT WITH CHECK (follower_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY follows_delete ON follows
            FOR DELETE USING (follower_id = (SELECT auth.uid()));
    """)

    # --- notifications: recipient read/update, sender insert ---
    op.execute("""
        CREATE POLICY notifications_select ON notifications
            FOR SELECT USING (recipient_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY notifications_insert ON notifications
            FOR INSERT WITH CHECK (sender_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY notifications_update ON notifications
            FOR UPDATE USING (recipient_id = (SELECT auth.uid()));
    """)


def downgrade() -> None:
    """Drop everything created in upgrade (policies go with their tables)."""
    op.drop_table("notifications")
    op.drop_table("follows")
    op.drop_table("thoughts")
    op.drop_index("uq_profiles_email", table_name="profiles")
    op.drop_index("uq_profiles_handle_lower", table_name="profiles")
    op.drop_table("profiles")
