"""Create users table with updated_at trigger

Revision ID: 001_create_users
Revises: 
Create Date: 2023-12-21 10:44:24.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_users'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.execute("""
        CREATE OR REPLACE FUNCTION update_users_modified_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = GREATEST(timezone('utc', clock_timestamp()), OLD.updated_at + interval '1 microsecond');
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_users_modtime
            BEFORE UPDATE
            ON users
            FOR EACH ROW
            EXECUTE FUNCTION update_users_modified_column();
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_users_modtime ON users")
    op.execute("DROP FUNCTION IF EXISTS update_users_modified_column()")
    op.drop_table('users')
