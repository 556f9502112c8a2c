"""
HTTP tests for the facility statistics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from app.main import create_app
from app.services.csv_import_service import CSVImportService
from db.models import FacilityLocationRecord, FacilityRecord
from db.repositories.errors import PersistenceError
from db.session import get_db
from tests.export_helpers import FROZEN_NOW, make_row


@pytest.fixture()
def client(session_factory):
    app = create_app(check_database=False)

    def _override_get_db():
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_facility_stats_returns_feature_collection(client, session_factory, write_export) -> None:
    CSVImportService(session_factory=session_factory, clock=lambda: FROZEN_NOW).import_csv(
        write_export([make_row()]), "waiting"
    )
    with session_factory() as session, session.begin():
        facility_id = session.scalar(select(FacilityRecord.id))
        session.add(FacilityLocationRecord(facility_id=facility_id, longitude=139.62, latitude=35.46))

    response = client.get("/facility-stats")

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "FeatureCollection"
    feature = body["features"][0]
    assert feature["geometry"] == {"type": "Point", "coordinates": [139.62, 35.46, 0.0]}
    assert feature["properties"]["name"] == "横浜保育園"
    assert [stat["waiting_count"] for stat in feature["properties"]["stats"]] == [
        "10",
        "12",
        "15",
        "18",
        "20",
        "20",
    ]
    assert {stat["acceptance_count"] for stat in feature["properties"]["stats"]} == {"-"}


def test_empty_database_returns_empty_collection(client) -> None:
    response = client.get("/facility-stats")

    assert response.status_code == 200
    assert response.json()["features"] == []


def test_persistence_error_maps_to_500(client, monkeypatch) -> None:
    def _raise(self):
        raise PersistenceError("fetch_facility_locations", "OperationalError")

    monkeypatch.setattr(
        "app.repositories.facility_stats_repository.SQLAlchemyFacilityStatsRepository.fetch_facility_locations",
        _raise,
    )

    response = client.get("/facility-stats")

    assert response.status_code == 500
    assert response.json() == {"detail": "Unable to load facility statistics."}
