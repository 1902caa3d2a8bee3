"""
Shared test fixtures.
"""

import json
import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from typing import Generator

from config import Settings
from services.dataset_service import MercurialeStore
from services.session_service import OrderSession, reset_order_session
from tests.factories import DatasetFactory


# ===================
# SAMPLE MERCURIALES
# ===================

@pytest.fixture
def folkestone_records() -> list:
    """Folkestone sample: string and numeric codes."""
    return [
        {"Code Produit": "A1", "Libellé produit": "Pain", "Prix HT": 1.2},
        {"Code Produit": 10452, "Libellé produit": "Beurre doux", "Prix HT": 3.1},
        {"Code Produit": "C7", "Libellé produit": "Crème fraîche", "Prix HT": 4.2},
    ]


@pytest.fixture
def vendome_records() -> list:
    """Vendome sample: different field set from Folkestone."""
    return [
        {"Code Produit": "A1", "Libellé produit": "Pain de mie", "Fournisseur": "Martin"},
        {"Code Produit": "V11", "Libellé produit": "Beurre demi-sel", "Fournisseur": "Laiterie"},
    ]


@pytest.fixture
def washington_records() -> list:
    """Washington sample: one record without a label."""
    return [
        {"Code Produit": "W1", "Libellé produit": "Farine T55"},
        {"Code Produit": "W2"},
    ]


@pytest.fixture
def sample_store(folkestone_records, vendome_records, washington_records) -> MercurialeStore:
    """Store with the three sample mercuriales."""
    return DatasetFactory.create_store(
        folkestone=folkestone_records,
        vendome=vendome_records,
        washington=washington_records,
    )


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at an empty temporary data directory."""
    return Settings(data_dir=tmp_path, _env_file=None)


@pytest.fixture
def data_dir(tmp_path, folkestone_records, vendome_records, washington_records) -> Path:
    """Temporary directory holding the three sample JSON files."""
    documents = {
        "mercuriale-folkestone.json": folkestone_records,
        "mercuriale-vendome.json": vendome_records,
        "mercuriale-washington.json": washington_records,
    }
    for name, records in documents.items():
        (tmp_path / name).write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return tmp_path


@pytest.fixture
def session(sample_store, test_settings) -> OrderSession:
    """Loaded session on the sample mercuriales, Folkestone active."""
    return OrderSession(store=sample_store, settings=test_settings)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(session) -> Generator:
    """
    Create FastAPI test client bound to the sample session.

    The app lifespan is not run, so no file is read.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/order")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    reset_order_session(session)
    yield TestClient(app)
    reset_order_session()


@pytest.fixture
def unloaded_client(test_settings) -> Generator:
    """Test client whose session never loaded its mercuriales."""
    from fastapi.testclient import TestClient
    from main import app

    reset_order_session(OrderSession(settings=test_settings))
    yield TestClient(app)
    reset_order_session()
