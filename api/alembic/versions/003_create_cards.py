"""Create cards table with updated_at and prev_rating triggers

Revision ID: 003_create_cards
Revises: 002_create_decks
Create Date: 2023-12-21 10:53:51.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '003_create_cards'
down_revision = '002_create_decks'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'cards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('deck_id', sa.Integer(), nullable=False),
        sa.Column('related_card_ids', postgresql.ARRAY(sa.Integer()), server_default=sa.text("ARRAY[]::INT[]"), nullable=False),
        sa.Column('from_text', sa.String(length=100), nullable=False),
        sa.Column('to_text_primary', sa.String(length=100), nullable=False),
        sa.Column('to_text_secondary', sa.String(length=100), nullable=True),
        sa.Column('example_text', sa.String(length=255), nullable=True),
        sa.Column('audio_url', sa.String(length=255), nullable=True),
        sa.Column('seen_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('seen_for', sa.Integer(), nullable=True),
        sa.Column('rating', sa.Integer(), server_default='0', nullable=False),
        sa.Column('prev_rating', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.CheckConstraint('rating BETWEEN 0 AND 4', name='ck_cards_rating_range'),
        sa.CheckConstraint('prev_rating BETWEEN 0 AND 4', name='ck_cards_prev_rating_range'),
        sa.ForeignKeyConstraint(['deck_id'], ['decks.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cards_deck_id'), 'cards', ['deck_id'], unique=False)

    op.execute("""
        CREATE OR REPLACE FUNCTION update_cards_modified_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = GREATEST(timezone('utc', clock_timestamp()), OLD.updated_at + interval '1 microsecond');
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_cards_modtime
            BEFORE UPDATE
            ON cards
            FOR EACH ROW
            EXECUTE FUNCTION update_cards_modified_column();
    """)

    # One step of rating history: the old rating moves to prev_rating on change
    op.execute("""
        CREATE OR REPLACE FUNCTION update_prev_rating_column()
        RETURNS TRIGGER AS $$
        BEGIN
            IF OLD.rating IS DISTINCT FROM NEW.rating THEN
                NEW.prev_rating = OLD.rating;
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        CREATE TRIGGER update_cards_rating
            BEFORE UPDATE
            ON cards
            FOR EACH ROW
            WHEN (OLD.rating IS DISTINCT FROM NEW.rating)
            EXECUTE FUNCTION update_prev_rating_column();
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS update_cards_rating ON cards")
    op.execute("DROP FUNCTION IF EXISTS update_prev_rating_column()")
    op.execute("DROP TRIGGER IF EXISTS update_cards_modtime ON cards")
    op.execute("DROP FUNCTION IF EXISTS update_cards_modified_column()")
    op.drop_index(op.f('ix_cards_deck_id'), table_name='cards')
    op.drop_table('cards')
