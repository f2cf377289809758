import pytest

from turnos.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from turnos.models.db import ObraSocial, Study
from turnos.services import TarifaService


@pytest.fixture
def tarifa_service(db_session, session_factory) -> TarifaService:
    return TarifaService(db_session, session_factory=session_factory)


class TestTarifaService:
    """Pruebas del servicio de tarifas"""

    @pytest.mark.asyncio
    async def test_create_and_list_with_names(self, tarifa_service, add_rows):
        await add_rows(
            Study(study_id="eco1", name="Ecografía", duration_minutes=30, active=True),
            ObraSocial(obra_social_id="osde", nombre="OSDE", activa=True),
        )

        created = await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 15000})
        listing = await tarifa_service.list_tarifas()

        assert created["tarifa"]["precio"] == 15000
        assert listing["count"] == 1
        item = listing["tarifas"][0]
        assert item["nombreEstudio"] == "Ecografía"
        assert item["nombreObraSocial"] == "OSDE"

    @pytest.mark.asyncio
    async def test_list_with_dangling_references(self, tarifa_service):
        await tarifa_service.create_tarifa({"estudio_id": "gone", "obra_social_id": "gone", "precio": 100})

        item = (await tarifa_service.list_tarifas())["tarifas"][0]

        assert item["nombreEstudio"] is None
        assert item["nombreObraSocial"] is None

    @pytest.mark.asyncio
    async def test_create_duplicate_pair_conflicts(self, tarifa_service):
        first = await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 100})

        with pytest.raises(ConflictError) as exc_info:
            await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 200})

        body = exc_info.value.to_dict()
        assert exc_info.value.status_code == 409
        assert body["tarifaExistente"]["tarifaId"] == first["tarifa"]["tarifaId"]

    @pytest.mark.asyncio
    async def test_create_requires_fields(self, tarifa_service):
        with pytest.raises(InvalidRequestError):
            await tarifa_service.create_tarifa({"estudio_id": "eco1", "precio": 100})

    @pytest.mark.asyncio
    async def test_update_into_existing_pair_conflicts(self, tarifa_service):
        await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 100})
        other = await tarifa_service.create_tarifa({"estudio_id": "rx01", "obra_social_id": "osde", "precio": 50})

        with pytest.raises(ConflictError):
            await tarifa_service.update_tarifa(other["tarifa"]["tarifaId"], {"estudio_id": "eco1"})

    @pytest.mark.asyncio
    async def test_update_keeping_own_pair(self, tarifa_service):
        created = await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 100})
        tarifa_id = created["tarifa"]["tarifaId"]

        updated = await tarifa_service.update_tarifa(tarifa_id, {"estudio_id": "eco1", "precio": 120})

        assert updated["tarifa"]["precio"] == 120
        assert "updatedAt" in updated["tarifa"]

    @pytest.mark.asyncio
    async def test_update_without_fields(self, tarifa_service):
        created = await tarifa_service.create_tarifa({"estudio_id": "eco1", "obra_social_id": "osde", "precio": 100})

        with pytest.raises(InvalidRequestError):
            await tarifa_service.update_tarifa(created["tarifa"]["tarifaId"], {})

    @pytest.mark.asyncio
    async def test_missing_tarifa(self, tarifa_service):
        with pytest.raises(NotFoundError):
            await tarifa_service.update_tarifa("missing", {"precio": 10})
        with pytest.raises(NotFoundError):
            await tarifa_service.delete_tarifa("missing")
