# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the ApplyTrack API:
# - fakes.py: In-memory identity gateway and profile store
# - test_validation.py: Input checks and request schemas
# - test_auth_guard.py: Bearer parsing and protected-route rejection
# - test_signup.py / test_login.py: Account flows end to end
# - test_tracking.py: Clicks, promotion, applied details
# - test_identity_gateway.py / test_profile_store.py: Supabase adapters
# - test_app.py: CORS, root, health, error shapes
# - test_migrations.py: Schema keys and access control
#
# Run tests with: pytest
# =============================================================================
