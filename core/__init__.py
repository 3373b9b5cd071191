# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog business logic:
# - models/: Pydantic schemas for characters
# - services/: Character CRUD, image resolution, public configuration
#
# Routers call into services; services never touch Request/Response.
# =============================================================================
