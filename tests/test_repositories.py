"""Tests for soft delete, pagination and uniqueness in the repository layer."""

import pytest

from recruitment_backend.core.error_handling import ConflictError
from recruitment_backend.models import PostingStatus, Role
from recruitment_backend.repositories import AccountRepository, ApplicationRepository, JobPostingRepository


def test_soft_deleted_rows_are_invisible(db, hr, posting_factory):
    repository = JobPostingRepository()
    kept = posting_factory(hr.account, title="Kept")
    dropped = posting_factory(hr.account, title="Dropped")

    repository.soft_delete(db, dropped)

    assert dropped.is_deleted is True
    assert dropped.deleted_at is not None
    assert repository.get_by_id(db, dropped.id) is None
    assert repository.count(db) == 1
    assert [p.id for p in repository.query(db)] == [kept.id]


def test_search_pages_and_totals(db, hr, posting_factory):
    for i in range(5):
        posting_factory(hr.account, title=f"Engineer {i}")
    posting_factory(hr.account, status=PostingStatus.DRAFT, title="Draft role")

    items, total = JobPostingRepository().search(db, page=2, limit=2, status=PostingStatus.OPEN.value)

    assert total == 5
    assert len(items) == 2


def test_search_matches_text_case_insensitively(db, hr, posting_factory):
    posting_factory(hr.account, title="Senior Data Engineer")
    posting_factory(hr.account, title="Office Manager")

    items, total = JobPostingRepository().search(db, page=1, limit=10, search="data")

    assert total == 1
    assert items[0].title == "Senior Data Engineer"


def test_application_counts_skip_withdrawn(db, hr, candidate, account_factory, posting_factory):
    posting = posting_factory(hr.account)
    other = account_factory(Role.CANDIDATE, "Olga", "Park")
    applications = ApplicationRepository()
    applications.create(db, job_posting_id=posting.id, candidate_id=candidate.account_id, resume="a.pdf")
    withdrawn = applications.create(db, job_posting_id=posting.id, candidate_id=other.id, resume="b.pdf")
    applications.soft_delete(db, withdrawn)

    assert JobPostingRepository().application_counts(db, [posting.id]) == {posting.id: 1}


def test_live_duplicate_email_conflicts(db, account_factory):
    account_factory(Role.HR, email="dup@example.com")
    with pytest.raises(ConflictError, match="Email already registered"):
        account_factory(Role.CANDIDATE, email="dup@example.com")


def test_email_is_reusable_after_soft_delete(db, account_factory):
    repository = AccountRepository()
    first = account_factory(Role.HR, email="again@example.com")
    repository.soft_delete(db, first)

    second = account_factory(Role.HR, email="again@example.com")

    assert second.id != first.id
    assert repository.get_by_email(db, "again@example.com").id == second.id


def test_duplicate_live_application_conflicts(db, hr, candidate, posting_factory):
    posting = posting_factory(hr.account)
    applications = ApplicationRepository()
    first = applications.create(db, job_posting_id=posting.id, candidate_id=candidate.account_id, resume="a.pdf")

    with pytest.raises(ConflictError):
        applications.create(db, job_posting_id=posting.id, candidate_id=candidate.account_id, resume="b.pdf")

    applications.soft_delete(db, first)
    again = applications.create(db, job_posting_id=posting.id, candidate_id=candidate.account_id, resume="c.pdf")
    assert applications.get_for_pair(db, posting.id, candidate.account_id).id == again.id
