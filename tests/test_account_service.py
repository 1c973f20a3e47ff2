"""Tests for registration, login and profile management."""

import pytest

from recruitment_backend.auth.utils import decode_access_token
from recruitment_backend.core.error_handling import AuthenticationError, ConflictError, NotFoundError
from recruitment_backend.models import Role
from recruitment_backend.schemas.account import AccountCreate, AccountUpdate, LoginRequest
from recruitment_backend.services.account_service import AccountService
from tests.helpers import TEST_PASSWORD


def registration(email="Mia@Acme.io", role=Role.CANDIDATE, **extra):
    return AccountCreate(
        email=email,
        password=TEST_PASSWORD,
        first_name="Mia",
        last_name="Wong",
        role=role,
        **extra
    )


def test_register_returns_token_for_new_account(db):
    response = AccountService().register(db, registration(skills=["Python"]))

    assert response.account.email == "mia@acme.io"
    assert response.account.full_name == "Mia Wong"
    assert response.account.skills == ["Python"]
    assert decode_access_token(response.access_token).account_id == response.account.id


def test_register_rejects_live_duplicate_email(db):
    service = AccountService()
    service.register(db, registration())

    with pytest.raises(ConflictError, match="Email already registered"):
        service.register(db, registration(email="MIA@acme.io", role=Role.HR))


def test_login(db):
    service = AccountService()
    service.register(db, registration())

    response = service.login(db, LoginRequest(email="mia@acme.io", password=TEST_PASSWORD))
    assert response.account.role == Role.CANDIDATE

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        service.login(db, LoginRequest(email="mia@acme.io", password="wrong-pass"))
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        service.login(db, LoginRequest(email="nobody@acme.io", password=TEST_PASSWORD))


def test_list_filters_by_role_and_search(db, hr, candidate, account_factory):
    account_factory(Role.CANDIDATE, "Zoe", "Hart")

    accounts, total, limit = AccountService().list_all(db, hr, role="CANDIDATE", search="zoe", limit=500)

    assert total == 1
    assert accounts[0].first_name == "Zoe"
    assert limit == 100


def test_update_profile_changes_only_given_fields(db, candidate):
    updated = AccountService().update_profile(db, candidate, AccountUpdate(phone="+49 30 1234", skills=["Go"]))

    assert updated.phone == "+49 30 1234"
    assert updated.skills == ["Go"]
    assert updated.first_name == "Carl"


def test_deleted_account_frees_email_and_disappears(db, candidate):
    service = AccountService()

    service.delete(db, candidate)

    with pytest.raises(NotFoundError, match="User not found"):
        service.get(db, candidate, candidate.account_id)
    with pytest.raises(AuthenticationError):
        service.login(db, LoginRequest(email=candidate.email, password=TEST_PASSWORD))

    again = service.register(db, registration(email=candidate.email))
    assert again.account.id != candidate.account_id
