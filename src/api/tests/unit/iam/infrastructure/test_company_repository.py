"""Unit tests for CompanyRepository and AccessRepository."""

from datetime import UTC, datetime
from unittest.mock import MagicMock, create_autospec

import pytest

from iam.domain.aggregates import Access, Company
from iam.domain.value_objects import CompanyId, UserId
from iam.infrastructure.company_repository import AccessRepository, CompanyRepository
from iam.infrastructure.models import AccessModel, CompanyModel
from iam.infrastructure.observability import CompanyRepositoryProbe


@pytest.fixture
def mock_probe():
    return create_autospec(CompanyRepositoryProbe, instance=True)


@pytest.fixture
def company() -> Company:
    return Company.create(name="Acme Corp", slug="acme-corp")


def _model(company: Company, **overrides) -> CompanyModel:
    fields = {
        "id": company.id.value,
        "name": company.name,
        "slug": company.slug,
        "deleted_at": company.deleted_at,
        "created_at": datetime(2026, 1, 1, tzinfo=UTC),
        "updated_at": datetime(2026, 1, 1, tzinfo=UTC),
    }
    fields.update(overrides)
    return CompanyModel(**fields)


def _result(model):
    result = MagicMock()
    result.scalar_one_or_none.return_value = model
    return result


class TestCompanyRepository:
    @pytest.fixture
    def repository(self, mock_session, mock_probe):
        return CompanyRepository(session=mock_session, probe=mock_probe)

    @pytest.mark.asyncio
    async def test_save_inserts_new_company(
        self, repository, mock_session, mock_probe, company
    ):
        mock_session.execute.return_value = _result(None)

        await repository.save(company)

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, CompanyModel)
        assert added.slug == "acme-corp"
        mock_probe.company_saved.assert_called_once_with(company.id.value, "acme-corp")

    @pytest.mark.asyncio
    async def test_save_keeps_slug_on_rename(self, repository, mock_session, company):
        """Renaming only writes the name; the slug column is untouched."""
        model = _model(company)
        mock_session.execute.return_value = _result(model)
        company.rename("Acme Holdings")

        await repository.save(company)

        mock_session.add.assert_not_called()
        assert model.name == "Acme Holdings"
        assert model.slug == "acme-corp"

    @pytest.mark.asyncio
    async def test_get_by_slug_maps_aggregate(self, repository, mock_session, company):
        mock_session.execute.return_value = _result(_model(company))

        found = await repository.get_by_slug("acme-corp")

        assert found is not None
        assert found.id == company.id
        assert found.name == "Acme Corp"

    @pytest.mark.asyncio
    async def test_get_by_slug_missing(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = _result(None)

        assert await repository.get_by_slug("nope") is None
        mock_probe.company_not_found.assert_called_once_with("nope")

    @pytest.mark.asyncio
    async def test_get_by_name_takes_first_match(
        self, repository, mock_session, company
    ):
        result = MagicMock()
        result.scalars.return_value.first.return_value = _model(company)
        mock_session.execute.return_value = result

        found = await repository.get_by_name("Acme Corp")

        assert found is not None
        assert found.slug == "acme-corp"

    @pytest.mark.asyncio
    async def test_delete_removes_row(
        self, repository, mock_session, mock_probe, company
    ):
        model = _model(company)
        mock_session.execute.return_value = _result(model)

        await repository.delete(company)

        mock_session.delete.assert_awaited_once_with(model)
        mock_probe.company_removed.assert_called_once_with(company.id.value)


class TestAccessRepository:
    @pytest.fixture
    def repository(self, mock_session, mock_probe):
        return AccessRepository(session=mock_session, probe=mock_probe)

    @pytest.mark.asyncio
    async def test_save_adds_grant(self, repository, mock_session, mock_probe):
        user_id = UserId.generate()
        company_id = CompanyId.generate()

        await repository.save(Access.grant(user_id, company_id))

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, AccessModel)
        assert added.user_id == user_id.value
        assert added.company_id == company_id.value
        mock_session.flush.assert_awaited_once()
        mock_probe.access_granted.assert_called_once_with(
            user_id.value, company_id.value
        )

    @pytest.mark.asyncio
    async def test_exists(self, repository, mock_session):
        result = MagicMock()
        result.scalar_one.return_value = 1
        mock_session.execute.return_value = result

        assert await repository.exists(UserId.generate(), CompanyId.generate())
