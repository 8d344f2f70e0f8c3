"""
Pytest configuration and shared fixtures for the compatibility scoring tests.
"""
import os
import sys
import time
from typing import Optional
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

# Settings are required at import time of api.app
TEST_JWT_SECRET = "test-jwt-secret-for-compatibility-scoring-suite"
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

def make_rule_row(name: str, **overrides) -> dict:
    """An ``ingredient_rules`` row with every score neutral and full confidence."""
    row = {
        "normalized_name": name,
        "category": None,
        "moisture_score": 0,
        "protein_score": 0,
        "scalp_health_score": 0,
        "curl_definition_score": 0,
        "frizz_control_score": 0,
        "porosity_low_score": 0,
        "porosity_medium_score": 0,
        "porosity_high_score": 0,
        "density_thin_score": 0,
        "density_medium_score": 0,
        "density_thick_score": 0,
        "buildup_risk": 0,
        "drying_risk": 0,
        "irritation_risk": 0,
        "breakage_impact": 0,
        "thinning_impact": 0,
        "dandruff_impact": 0,
        "color_treated_impact": 0,
        "heat_damage_impact": 0,
        "humid_climate_modifier": 0,
        "dry_climate_modifier": 0,
        "confidence": 1.0,
    }
    row.update(overrides)
    return row


@pytest.fixture
def sample_profile_row() -> dict:
    """Sample ``hair_profiles`` row (as returned by Supabase)."""
    return {
        "id": "profile-001",
        "hair_porosity": "high",
        "hair_density": "thick",
        "hair_concerns": ["breakage", "heat damage"],
        "scalp_condition": "dry",
        "climate": "Humid subtropical",
        "hair_type": "4a",
    }


@pytest.fixture
def sample_ingredient_row() -> dict:
    """Sample ``product_ingredients`` row with only raw text."""
    return {
        "raw_ingredients_text": "Water, Shea Butter (Organic), Glycerin, Fragrance*",
        "parsed_ingredients": None,
    }


@pytest.fixture
def sample_rule_rows() -> list[dict]:
    """Rules for two of the four sample ingredients, in store order."""
    return [
        make_rule_row("glycerin", moisture_score=4, porosity_high_score=3, confidence=0.9),
        make_rule_row("water", moisture_score=2, confidence=1.0),
    ]


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client; every query chain returns an empty result."""
    mock_client = MagicMock()
    mock_client.table.return_value.select.return_value.execute.return_value.data = []
    mock_client.table.return_value.upsert.return_value.execute.return_value.data = [{"id": "test"}]
    return mock_client


@pytest.fixture
def mock_repository(sample_profile_row, sample_ingredient_row, sample_rule_rows):
    """ScoringRepository stand-in preloaded with the sample rows."""
    from services.repository import ScoringRepository

    repo = MagicMock(spec=ScoringRepository)
    repo.get_latest_profile.return_value = sample_profile_row
    repo.get_product_ingredients.return_value = sample_ingredient_row
    repo.lookup_rules.return_value = sample_rule_rows
    repo.get_score.return_value = None
    repo.list_scores.return_value = []
    return repo


@pytest.fixture
def mock_dispatcher():
    from services.discovery import DiscoveryDispatcher
    return MagicMock(spec=DiscoveryDispatcher)


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app():
    """Fresh FastAPI application (dependency overrides don't leak between tests)."""
    from api.app import create_app
    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient
    return TestClient(app)


# ============================================================================
# JWT Token Generation
# ============================================================================

def generate_test_jwt(
    user_id: str = "test-user-001",
    exp_seconds: int = 3600,
    audience: str = "authenticated",
    secret: Optional[str] = None,
) -> str:
    """Sign a Supabase-style HS256 token with the test secret."""
    import jwt

    now = int(time.time())
    payload = {
        "sub": user_id,
        "aud": audience,
        "role": "authenticated",
        "email": f"{user_id}@test.com",
        "exp": now + exp_seconds,
        "iat": now,
        "is_anonymous": False,
    }
    return jwt.encode(payload, secret or os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def jwt_factory():
    """``generate_test_jwt`` for tests that need custom claims."""
    return generate_test_jwt


@pytest.fixture
def test_jwt_token() -> str:
    return generate_test_jwt()


@pytest.fixture
def auth_headers(test_jwt_token: str) -> dict:
    return {"Authorization": f"Bearer {test_jwt_token}"}


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "supabase: marks tests that require Supabase")


def pytest_collection_modifyitems(config, items):
    """Auto-skip Supabase tests if no real project is configured."""
    skip_supabase = pytest.mark.skip(reason="Supabase tests require credentials")
    placeholder = os.getenv("SUPABASE_URL", "").startswith("https://test.")

    for item in items:
        if "supabase" in item.keywords and placeholder:
            item.add_marker(skip_supabase)
