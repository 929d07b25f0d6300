# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the TaskFlow API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_query_builder.py / test_record_client.py: query building and backend calls
# - test_task_service.py / test_project_service.py / test_statistics.py: services
# - test_list_service.py: Local lists and the local store
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================
