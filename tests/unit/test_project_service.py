"""Unit tests for ProjectService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.circuitweb.core.exceptions import Forbidden, NotFound
from src.circuitweb.services.project_service import ProjectService
from tests.factories import ProjectFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_project_repo() -> MagicMock:
    """Create mock project repository."""
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_by_owner = AsyncMock(return_value=[])
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def project_service(mock_project_repo, mock_session) -> ProjectService:
    return ProjectService(mock_project_repo, mock_session)


class TestCreateProject:
    async def test_create_sets_owner_and_blank_update_time(
        self, project_service, mock_project_repo, mock_session
    ):
        project = await project_service.create_project("owner-1", "Amplifier", None)

        assert project.owner_id == "owner-1"
        assert project.name == "Amplifier"
        assert project.description == ""
        assert project.updated_at is None
        assert project.id
        mock_project_repo.add.assert_called_once_with(project)
        mock_session.commit.assert_awaited_once()

    async def test_create_generates_distinct_ids(self, project_service):
        first = await project_service.create_project("owner-1", "A")
        second = await project_service.create_project("owner-1", "B")

        assert first.id != second.id

    async def test_create_rolls_back_on_commit_failure(self, project_service, mock_session):
        mock_session.commit.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await project_service.create_project("owner-1", "Amplifier")

        mock_session.rollback.assert_awaited_once()


class TestGetOwnedProject:
    async def test_returns_project_for_owner(self, project_service, mock_project_repo):
        project = ProjectFactory.build(owner_id="owner-1")
        mock_project_repo.get_by_id.return_value = project

        assert await project_service.get_owned_project(project.id, "owner-1") is project

    async def test_missing_project_raises_not_found(self, project_service):
        with pytest.raises(NotFound) as exc_info:
            await project_service.get_owned_project("missing", "owner-1")

        assert exc_info.value.message == "Project not found"

    async def test_custom_not_found_message(self, project_service):
        with pytest.raises(NotFound) as exc_info:
            await project_service.get_owned_project(
                "missing", "owner-1", not_found_message="Original project not found"
            )

        assert exc_info.value.message == "Original project not found"

    async def test_other_caller_is_forbidden(self, project_service, mock_project_repo):
        mock_project_repo.get_by_id.return_value = ProjectFactory.build(owner_id="owner-1")

        with pytest.raises(Forbidden):
            await project_service.get_owned_project("p1", "someone-else")


class TestUpdateProject:
    async def test_update_missing_project_raises(self, project_service, mock_session):
        with pytest.raises(NotFound) as exc_info:
            await project_service.update_project("missing", name="New")

        assert "missing" in exc_info.value.message
        mock_session.commit.assert_not_awaited()

    async def test_update_applies_non_empty_values(self, project_service, mock_project_repo):
        project = ProjectFactory.build(owner_id="owner-1", name="Old", description="Keep me")
        mock_project_repo.get_by_id.return_value = project

        updated = await project_service.update_project(project.id, name="New", description="")

        assert updated.name == "New"
        assert updated.description == "Keep me"
        assert updated.updated_at is not None


class TestDeleteProject:
    async def test_delete_missing_returns_false(self, project_service, mock_project_repo):
        assert await project_service.delete_project("missing") is False
        mock_project_repo.delete.assert_not_awaited()

    async def test_delete_existing_returns_true(
        self, project_service, mock_project_repo, mock_session
    ):
        project = ProjectFactory.build(owner_id="owner-1")
        mock_project_repo.get_by_id.return_value = project

        assert await project_service.delete_project(project.id) is True
        mock_project_repo.delete.assert_awaited_once_with(project)
        mock_session.commit.assert_awaited_once()


class TestDuplicateProject:
    async def test_duplicate_copies_description_and_owner(
        self, project_service, mock_project_repo
    ):
        original = ProjectFactory.build(owner_id="owner-1", description="Filters")
        mock_project_repo.get_by_id.return_value = original

        copy = await project_service.duplicate_project(original.id, "Filters (copy)")

        assert copy.id != original.id
        assert copy.name == "Filters (copy)"
        assert copy.description == "Filters"
        assert copy.owner_id == "owner-1"
        assert copy.updated_at is None

    async def test_duplicate_missing_raises_not_found(self, project_service):
        with pytest.raises(NotFound):
            await project_service.duplicate_project("missing", "Copy")
