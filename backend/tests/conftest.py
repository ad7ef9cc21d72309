"""Pytest fixtures for matching, catalog and API tests.

Provides reusable test fixtures for:
- A small electrical catalog (corrugated pipe, rigid conduit, fan box)
- Alias entries for that catalog
- Matchers and registries built on them
- An in-memory SQLite engine and session factory
"""

import os
import sys
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CATALOG_SOURCE", "csv")
os.environ.setdefault("LOG_JSON", "false")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from matching.alias_index import AliasIndex
from matching.config import MappingConfig
from matching.engine import DeterministicMatcher
from matching.ports import AliasEntry, CatalogEntry
from matching.registry import MatcherRegistry
from models.base import Base
from fixtures.providers import StaticAliasProvider, StaticCatalogProvider


@pytest.fixture
def catalog_entries():
    """Five SKUs across three families, in price master order."""
    return [
        CatalogEntry(
            sku_code="NFC25",
            product_family="Corrugated Flexible Pipe",
            description="25mm Corrugated PP Pipe",
            uom="MTR",
            material="PP",
            alt_material="FRPP",
            size_od_mm=25.0,
            tolerance_mm=2.0,
            rate=18.5,
        ),
        CatalogEntry(
            sku_code="NFC32",
            product_family="Corrugated Flexible Pipe",
            description="32mm Corrugated PP Pipe",
            uom="MTR",
            material="PP",
            alt_material="FRPP",
            size_od_mm=32.0,
            tolerance_mm=2.0,
            rate=26.0,
        ),
        CatalogEntry(
            sku_code="PVC25M",
            product_family="Rigid PVC Conduit",
            description="25mm Rigid PVC Conduit Medium",
            uom="MTR",
            material="PVC",
            gauge="M",
            size_od_mm=25.0,
            tolerance_mm=1.5,
            rate=41.0,
        ),
        CatalogEntry(
            sku_code="PVC25H",
            product_family="Rigid PVC Conduit",
            description="25mm Rigid PVC Conduit Heavy",
            uom="MTR",
            material="PVC",
            gauge="H",
            size_od_mm=25.0,
            tolerance_mm=1.5,
            rate=52.0,
        ),
        CatalogEntry(
            sku_code="GFB3OCT",
            product_family="GI Fan Box",
            description="3 inch Octagonal GI Fan Box",
            uom="PCS",
            material="MS",
            size_od_mm=76.2,
            tolerance_mm=3.0,
            rate=64.0,
        ),
    ]


@pytest.fixture
def alias_entries():
    return [
        AliasEntry(alias="25mm", sku_code="NFC25", boost=0.3),
        AliasEntry(alias="corrugated", sku_code="NFC25", boost=0.3),
        AliasEntry(alias="32mm", sku_code="NFC32", boost=0.3),
        AliasEntry(alias="corrugated", sku_code="NFC32", boost=0.3),
        AliasEntry(alias="medium", sku_code="PVC25M", boost=0.3),
        AliasEntry(alias="fan box", sku_code="GFB3OCT", boost=0.3),
    ]


@pytest.fixture
def alias_index(alias_entries):
    return AliasIndex.from_entries(alias_entries)


@pytest.fixture
def mapping_config():
    return MappingConfig()


@pytest.fixture
def matcher(catalog_entries, alias_index, mapping_config):
    return DeterministicMatcher(catalog_entries, alias_index, mapping_config)


@pytest.fixture
def catalog_provider(catalog_entries):
    return StaticCatalogProvider(catalog_entries)


@pytest.fixture
def alias_provider(alias_entries):
    return StaticAliasProvider(alias_entries)


@pytest.fixture
def registry(catalog_provider, alias_provider, mapping_config):
    """Registry with a loaded snapshot."""
    registry = MatcherRegistry(catalog_provider, alias_provider, mapping_config)
    registry.reload()
    return registry


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine shared across connections, tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)
