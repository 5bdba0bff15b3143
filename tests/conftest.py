# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from fakes import DIMENSIONS  # noqa: E402

EMBEDDING_URL = (
    "https://example-openai.openai.azure.com/openai/deployments/"
    "text-embedding-3-small/embeddings?api-version=2024-10-21"
)


@pytest.fixture
def cfg() -> Config:
    return Config(
        cosmos_endpoint="https://example-cosmos.documents.azure.com:443/",
        cosmos_key="cosmos-key",
        cosmos_database="products-test",
        openai_azure_api_key="openai-key",
        openai_azure_embedding_endpoint=EMBEDDING_URL,
        embedding_dimensions=DIMENSIONS,
    )


@pytest.fixture
def product_payload() -> dict:
    return {
        "name": "Smart LED Bulb",
        "brand": "Lumina",
        "sku": "LUM-SB-001",
        "category": "Lighting",
        "price": 19.99,
        "currency": "USD",
        "stock": 150,
        "description": "Illuminate your home with smart bulbs",
        "features": "Wi-Fi control, dimmable, 16 million colours",
        "rating": 4.6,
        "reviewsCount": 1280,
        "tags": ["smart home", "lighting", "led"],
        "imageUrl": "https://example.com/images/smart-bulb.png",
        "manufacturer": "Lumina Corp",
        "model": "SB-100",
        "releaseDate": "2024-03-01",
        "warranty": "2 years",
        "dimensions": {"weight": "60g", "width": "6cm", "height": "11cm", "depth": "6cm"},
        "color": "White",
        "material": "Plastic",
        "origin": "Germany",
    }
