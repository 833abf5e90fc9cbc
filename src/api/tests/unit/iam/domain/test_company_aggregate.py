"""Unit tests for the Company, Access and AccessToken aggregates."""

from datetime import UTC, datetime

import pytest

from iam.domain.aggregates import Access, AccessToken, Company
from iam.domain.exceptions import NotDeletedError
from iam.domain.value_objects import MAIN_COMPANY_NAME, CompanyId, UserId


class TestCompany:
    def test_create(self):
        company = Company.create(name="Acme Corp", slug="acme-corp")

        assert isinstance(company.id, CompanyId)
        assert company.slug == "acme-corp"
        assert company.is_deleted is False

    def test_rename_keeps_slug(self):
        company = Company.create(name="Acme Corp", slug="acme-corp")

        company.rename("Acme Industries")

        assert company.name == "Acme Industries"
        assert company.slug == "acme-corp"

    def test_is_main(self):
        assert Company.create(name=MAIN_COMPANY_NAME, slug="main").is_main is True
        assert Company.create(name="Mainframe", slug="mainframe").is_main is False

    def test_soft_delete_and_restore(self):
        company = Company.create(name="Acme", slug="acme")

        company.soft_delete()
        assert company.is_deleted is True

        company.restore()
        assert company.is_deleted is False

    def test_soft_delete_touches_updated_at(self):
        company = Company.create(name="Acme", slug="acme")
        company.updated_at = datetime(2026, 1, 1, tzinfo=UTC)

        company.soft_delete()

        assert company.updated_at == company.deleted_at

    def test_restore_of_live_company_is_rejected(self):
        with pytest.raises(NotDeletedError):
            Company.create(name="Acme", slug="acme").restore()


class TestAccess:
    def test_grant(self):
        user_id = UserId.generate()
        company_id = CompanyId.generate()

        access = Access.grant(user_id, company_id)

        assert access.user_id == user_id
        assert access.company_id == company_id
        assert access.created_at is not None


class TestAccessToken:
    def test_issue_and_record_usage(self):
        token = AccessToken.issue(
            user_id=UserId.generate(),
            name="auth_token",
            token_hash="hash",
            prefix="adm_abcdefgh",
        )

        assert token.last_used_at is None

        token.record_usage()

        assert token.last_used_at is not None


class TestIdentifiers:
    def test_from_string_rejects_invalid_ulid(self):
        with pytest.raises(ValueError):
            UserId.from_string("not-a-ulid")

    def test_from_string_accepts_generated_id(self):
        user_id = UserId.generate()

        assert UserId.from_string(user_id.value) == user_id
