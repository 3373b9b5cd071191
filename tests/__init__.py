# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Character Library API:
# - test_models.py: Pydantic model validation
# - test_character_store.py: In-memory and Supabase stores
# - test_image_service.py: Image resolvers
# - test_character_service.py: CRUD orchestration and failure policy
# - test_configuration.py: Settings and public configuration accessors
# - test_api.py: HTTP endpoints through TestClient
# - test_api_client.py: httpx client against a mock transport
#
# Run tests with: pytest
# =============================================================================
