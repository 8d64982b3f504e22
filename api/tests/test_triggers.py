"""
Database trigger and constraint behaviour.

Covers the one-step rating history on cards, updated_at maintenance on all
three tables and the foreign keys between them.
"""
import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from conftest import add_card, add_deck, add_user, tick
from flashdeck.core.exceptions import ConflictError
from flashdeck.models import Card, Deck, User
from flashdeck.services import deck_service, user_service


def set_card(session: Session, card_id: int, **values) -> Card:
    session.exec(update(Card).where(Card.id == card_id).values(**values))
    session.commit()
    return session.get(Card, card_id)


class TestPrevRating:

    def test_new_card_starts_unrated(self, session, deck_id):
        card = session.get(Card, add_card(deck_id))

        assert card.rating == 0
        assert card.prev_rating == 0
        assert card.related_card_ids == []

    def test_changed_rating_moves_into_prev_rating(self, session, deck_id):
        card_id = add_card(deck_id)

        card = set_card(session, card_id, rating=3)
        assert (card.rating, card.prev_rating) == (3, 0)

        card = set_card(session, card_id, rating=1)
        assert (card.rating, card.prev_rating) == (1, 3)

        card = set_card(session, card_id, rating=4)
        assert (card.rating, card.prev_rating) == (4, 1)

    def test_same_rating_keeps_prev_rating(self, session, deck_id):
        card_id = add_card(deck_id)
        set_card(session, card_id, rating=2)
        set_card(session, card_id, rating=3)

        card = set_card(session, card_id, rating=3, seen_for=1500)

        assert card.rating == 3
        assert card.prev_rating == 2
        assert card.seen_for == 1500

    def test_update_without_rating_keeps_prev_rating(self, session, deck_id):
        card_id = add_card(deck_id)
        set_card(session, card_id, rating=2)

        card = set_card(session, card_id, from_text="Katze")

        assert card.prev_rating == 0
        assert card.rating == 2

    def test_orm_update_moves_rating(self, session, deck_id):
        card = session.get(Card, add_card(deck_id))
        card.rating = 4
        session.add(card)
        session.commit()
        session.refresh(card)

        assert card.prev_rating == 0

        card.rating = 2
        session.add(card)
        session.commit()
        session.refresh(card)

        assert card.prev_rating == 4

    def test_rating_out_of_range_is_rejected(self, session, deck_id):
        card_id = add_card(deck_id)

        with pytest.raises(IntegrityError):
            set_card(session, card_id, rating=5)


class TestUpdatedAt:

    def test_users_updated_at_increases(self, session, user_id):
        before = session.get(User, user_id).updated_at

        for name in ("glen", "coden"):
            tick()
            session.exec(update(User).where(User.id == user_id).values(name=name))
            session.commit()
            after = session.get(User, user_id).updated_at
            assert after > before
            before = after

    def test_decks_updated_at_increases(self, session, deck_id):
        before = session.get(Deck, deck_id).updated_at
        tick()

        session.exec(update(Deck).where(Deck.id == deck_id).values(design_key="ocean"))
        session.commit()

        assert session.get(Deck, deck_id).updated_at > before

    def test_cards_updated_at_increases(self, session, deck_id):
        card_id = add_card(deck_id)
        before = session.get(Card, card_id).updated_at

        for rating in (3, 3, 1):
            tick()
            card = set_card(session, card_id, rating=rating)
            assert card.updated_at > before
            before = card.updated_at

    @pytest.mark.parametrize("model, values", [
        (User, lambda n: {"name": f"glen{n}"}),
        (Card, lambda n: {"seen_for": n}),
    ])
    def test_back_to_back_updates_still_move_forward(self, session, user_id, deck_id, model, values):
        row_id = add_card(deck_id) if model is Card else user_id
        stamps = [session.exec(select(model.updated_at).where(model.id == row_id)).one()]

        for n in range(20):
            session.exec(update(model).where(model.id == row_id).values(**values(n)))
            session.commit()
            stamps.append(session.exec(select(model.updated_at).where(model.id == row_id)).one())

        assert all(earlier < later for earlier, later in zip(stamps, stamps[1:])), stamps

    def test_created_at_is_untouched(self, session, deck_id):
        card_id = add_card(deck_id)
        created_at = session.get(Card, card_id).created_at
        tick()

        card = set_card(session, card_id, rating=2)

        assert card.created_at == created_at


class TestForeignKeys:

    def test_user_with_decks_cannot_be_deleted(self, session, deck_id, user_id):
        with pytest.raises(ConflictError):
            user_service.delete_user(session, user_id)

        assert session.get(User, user_id) is not None

    def test_deck_with_cards_cannot_be_deleted(self, session, deck_id, user_id):
        add_card(deck_id)

        with pytest.raises(ConflictError):
            deck_service.delete_deck(session, deck_id, user_id)

        assert session.get(Deck, deck_id) is not None

    def test_empty_deck_and_user_can_be_deleted(self, session, deck_id, user_id):
        assert deck_service.delete_deck(session, deck_id, user_id).rows_affected == 1
        assert user_service.delete_user(session, user_id).rows_affected == 1

    def test_deck_requires_existing_user(self):
        with pytest.raises(IntegrityError):
            add_deck(user_id=999)

    def test_card_requires_existing_deck(self):
        add_user()
        with pytest.raises(IntegrityError):
            add_card(deck_id=999)
