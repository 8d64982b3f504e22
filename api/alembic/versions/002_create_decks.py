"""Create decks table with updated_at trigger

Revision ID: 002_create_decks
Revises: 001_create_users
Create Date: 2023-12-21 10:53:37.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_create_decks'
down_revision = '001_create_users'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'decks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('from_language', sa.String(length=100), nullable=False),
        sa.Column('to_language_primary', sa.String(length=100), nullable=False),
        sa.Column('to_language_secondary', sa.String(length=100), nullable=True),
        sa.Column('design_key', sa.String(length=100), nullable=True),
        sa.Column('seen_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_decks_user_id'), 'decks', ['user_id'], unique=False)

    op.execute("""
        CREATE OR REPLACE FUNCTION update_decks_modified_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = GREATEST(timezone('utc', clock_timestamp()), OLD.updated_at + interval '1 microsecond');
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_decks_modtime
            BEFORE UPDATE
            ON decks
            FOR EACH ROW
            EXECUTE FUNCTION update_decks_modified_column();
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_decks_modtime ON decks")
    op.execute("DROP FUNCTION IF EXISTS update_decks_modified_column()")
    op.drop_index(op.f('ix_decks_user_id'), table_name='decks')
    op.drop_table('decks')
