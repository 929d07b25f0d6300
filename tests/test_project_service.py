# =============================================================================
# tests/test_project_service.py - Project Service Tests
# =============================================================================

from unittest.mock import MagicMock

import pytest

from core.services import ProjectService
from lib.record_client import RecordClient, RecordClientError


class TestProjectCrud:
    """Project CRUD against the in-memory backend."""

    def test_list_sorted_by_start_date(self, project_service, fake_backend, sample_projects):
        fake_backend.seed("project2", sample_projects)

        result = project_service.get_projects()

        assert result["total"] == 3
        assert [p["Name"] for p in result["data"]] == [
            "Data cleanup",
            "Website relaunch",
            "Mobile app",
        ]

    def test_status_filter(self, project_service, fake_backend, sample_projects):
        fake_backend.seed("project2", sample_projects)

        result = project_service.get_projects({"status": "Completed"})

        assert [p["Name"] for p in result["data"]] == ["Data cleanup"]

    def test_search_on_name(self, project_service, fake_backend, sample_projects):
        fake_backend.seed("project2", sample_projects)

        result = project_service.get_projects(search="app")

        assert [p["Name"] for p in result["data"]] == ["Mobile app"]

    def test_team_members_round_trip(self, project_service):
        created = project_service.create_project(
            {"Name": "Launch", "team_members": ["alice", "bob"]}
        )

        fetched = project_service.get_project_by_id(created["Id"])

        assert fetched["team_members"] == ["alice", "bob"]

    def test_get_missing(self, project_service):
        assert project_service.get_project_by_id(1) is None

    def test_update_and_delete(self, project_service):
        created = project_service.create_project({"Name": "Launch", "status": "Not Started"})

        updated = project_service.update_project(created["Id"], {"status": "In Progress"})
        deleted = project_service.delete_project(created["Id"])

        assert updated["status"] == "In Progress"
        assert deleted["Id"] == created["Id"]
        assert project_service.get_project_by_id(created["Id"]) is None

    def test_update_missing(self, project_service):
        with pytest.raises(RecordClientError):
            project_service.update_project(42, {"Name": "Ghost"})

    def test_uses_configured_table(self):
        records = MagicMock(spec=RecordClient)
        records.id_field = "Id"
        records.fetch_records.return_value = {"data": [], "total": 0}

        ProjectService(records, table="projects_v2").get_projects()

        assert records.fetch_records.call_args.args[0] == "projects_v2"


class TestProjectStatistics:
    """Project status counts."""

    def test_counts(self, project_service, fake_backend, sample_projects):
        fake_backend.seed("project2", sample_projects)

        stats = project_service.get_project_statistics()

        assert stats == {
            "status_counts": {"Not Started": 1, "In Progress": 1, "Completed": 1}
        }

    def test_empty_backend(self, project_service):
        stats = project_service.get_project_statistics()

        assert stats["status_counts"] == {"Not Started": 0, "In Progress": 0, "Completed": 0}

    def test_error_propagates(self, project_service, fake_backend):
        fake_backend.error = ConnectionError("down")

        with pytest.raises(ConnectionError):
            project_service.get_project_statistics()
