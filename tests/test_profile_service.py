"""
Tests for ProfileService against a real session.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from backend.app.schemas import ExperienceRequest, ProfileUpsertRequest
from backend.app.services.profile_service import ProfileService
from devconnector.errors import InvalidArgument, NotFound
from devconnector.models import Post, Profile, User

from factories import create_post, create_profile


class TestUpsert:
    def test_creates_profile(self, test_session, test_user):
        service = ProfileService(test_session)
        profile = service.upsert_profile(
            test_user.id, ProfileUpsertRequest(status="Dev", skills="Go, SQL", twitter="t")
        )
        assert profile.skills == ["Go", "SQL"]
        assert profile.social == {"twitter": "t"}
        assert profile.user.id == test_user.id

    def test_replace_clears_omitted_fields(self, test_session, test_user):
        service = ProfileService(test_session)
        first = service.upsert_profile(
            test_user.id, ProfileUpsertRequest(status="Dev", skills="Go", company="Acme", bio="hi")
        )
        second = service.upsert_profile(test_user.id, ProfileUpsertRequest(status="Lead", skills="Go"))

        assert second.id == first.id
        assert second.company is None
        assert second.bio is None
        assert test_session.query(Profile).count() == 1

    def test_replace_preserves_entries(self, test_db, test_session, test_user):
        create_profile(
            test_db,
            test_user,
            experience=[{"_id": "e1", "title": "Dev", "company": "Acme", "from": "2020-01-01"}],
        )
        service = ProfileService(test_session)
        profile = service.upsert_profile(test_user.id, ProfileUpsertRequest(status="Lead", skills="Go"))
        assert [e["_id"] for e in profile.experience] == ["e1"]

    def test_unknown_user(self, test_session):
        service = ProfileService(test_session)
        with pytest.raises(NotFound):
            service.upsert_profile(
                "6f1c2a9e-3b7d-4c1e-9a55-0d2f8e4b7a10",
                ProfileUpsertRequest(status="Dev", skills="Go"),
            )
        assert test_session.query(Profile).count() == 0


class TestLookup:
    @pytest.mark.parametrize(
        "bad_id",
        [
            "",
            "123",
            "not-an-id",
            "6f1c2a9e-zzzz",
            "{6f1c2a9e-3b7d-4c1e-9a55-0d2f8e4b7a10}",
            "urn:uuid:6f1c2a9e-3b7d-4c1e-9a55-0d2f8e4b7a10",
            "6f1c2a9e3b7d4c1e9a550d2f8e4b7a10",
        ],
    )
    def test_invalid_id_never_reaches_store(self, bad_id):
        session = MagicMock()
        service = ProfileService(session)

        with pytest.raises(InvalidArgument) as exc:
            service.get_profile_by_user_id(bad_id)

        assert exc.value.message == "Invalid ID"
        session.query.assert_not_called()
        session.get.assert_not_called()

    def test_valid_but_unknown_id(self, test_session):
        with pytest.raises(NotFound) as exc:
            ProfileService(test_session).get_profile_by_user_id("6f1c2a9e-3b7d-4c1e-9a55-0d2f8e4b7a10")
        assert exc.value.message == "Profile not found"


class TestEntries:
    def test_entries_get_distinct_ids(self, test_db, test_session, test_user):
        create_profile(test_db, test_user)
        service = ProfileService(test_session)
        payload = ExperienceRequest.model_validate({"title": "Dev", "company": "Acme", "from": "2020-01-01"})

        service.add_experience(test_user.id, payload)
        profile = service.add_experience(test_user.id, payload)

        ids = [e["_id"] for e in profile.experience]
        assert len(set(ids)) == 2

    def test_remove_from_missing_profile(self, test_session, test_user):
        with pytest.raises(NotFound) as exc:
            ProfileService(test_session).remove_education(test_user.id, "anything")
        assert exc.value.message == "There is no profile for this user"


class TestCascade:
    def test_failure_propagates_and_rolls_back(self, test_db, test_user, monkeypatch):
        create_profile(test_db, test_user)
        create_post(test_db, test_user)

        def broken_delete(self, user_id):
            raise OperationalError("DELETE FROM profiles", {}, Exception("locked"))

        monkeypatch.setattr(
            "devconnector.repositories.ProfileRepository.delete_by_user_id", broken_delete
        )

        with pytest.raises(OperationalError):
            with test_db.session() as session:
                ProfileService(session).delete_own_profile_cascade(test_user.id)

        # The posts deleted in the first step come back with the rollback
        with test_db.session() as session:
            assert session.query(Post).filter(Post.user_id == test_user.id).count() == 1
            assert session.query(Profile).count() == 1
            assert session.get(User, test_user.id) is not None

    def test_cascade_is_idempotent_for_missing_rows(self, test_session, test_user):
        service = ProfileService(test_session)
        service.delete_own_profile_cascade(test_user.id)
        service.delete_own_profile_cascade(test_user.id)
        assert test_session.get(User, test_user.id) is None
