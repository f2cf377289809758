import pytest

from turnos.core.exceptions import InvalidRequestError, NotFoundError
from turnos.services import DoctorService, ObraSocialService, StudyService


class TestDoctorService:
    """Pruebas del servicio de médicos"""

    @pytest.mark.asyncio
    async def test_create_assigns_short_id(self, db_session):
        service = DoctorService(db_session)

        result = await service.create_doctor({"name": "  Dra. Gómez ", "specialty": "Ecografía"})

        doctor = result["doctor"]
        assert result["message"] == "Doctor created successfully"
        assert len(doctor["doctorId"]) == 4
        assert doctor["name"] == "Dra. Gómez"
        assert doctor["active"] is True

    @pytest.mark.asyncio
    async def test_create_requires_name(self, db_session):
        with pytest.raises(InvalidRequestError):
            await DoctorService(db_session).create_doctor({"specialty": "Ecografía"})

    @pytest.mark.asyncio
    async def test_list_sorted_and_filters_inactive(self, db_session):
        service = DoctorService(db_session)
        await service.create_doctor({"name": "Dr. Zapata"})
        created = await service.create_doctor({"name": "Dra. Acosta"})
        await service.update_doctor(created["doctor"]["doctorId"], {"active": False})
        await service.create_doctor({"name": "Dr. Benítez"})

        active = await service.list_doctors()
        everyone = await service.list_doctors(include_inactive=True)

        assert [doctor["name"] for doctor in active["doctors"]] == ["Dr. Benítez", "Dr. Zapata"]
        assert [doctor["name"] for doctor in everyone["doctors"]] == ["Dr. Benítez", "Dr. Zapata", "Dra. Acosta"]
        assert everyone["count"] == 3

    @pytest.mark.asyncio
    async def test_update_partial(self, db_session):
        service = DoctorService(db_session)
        created = await service.create_doctor({"name": "Dra. Gómez", "specialty": "Ecografía"})

        updated = await service.update_doctor(created["doctor"]["doctorId"], {"specialty": "Radiología"})

        assert updated["doctor"]["name"] == "Dra. Gómez"
        assert updated["doctor"]["specialty"] == "Radiología"
        assert "updatedAt" in updated["doctor"]

    @pytest.mark.asyncio
    async def test_update_cannot_clear_name(self, db_session):
        service = DoctorService(db_session)
        created = await service.create_doctor({"name": "Dra. Gómez"})

        with pytest.raises(InvalidRequestError):
            await service.update_doctor(created["doctor"]["doctorId"], {"name": "  "})

    @pytest.mark.asyncio
    async def test_delete_then_get(self, db_session):
        service = DoctorService(db_session)
        doctor_id = (await service.create_doctor({"name": "Dra. Gómez"}))["doctor"]["doctorId"]

        await service.delete_doctor(doctor_id)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_doctor(doctor_id)
        assert exc_info.value.message == "Doctor not found"


class TestStudyService:
    """Pruebas del servicio de estudios"""

    @pytest.mark.asyncio
    async def test_create_defaults(self, db_session):
        result = await StudyService(db_session).create_study({"name": "Ecografía", "honorario": 12000})

        study = result["study"]
        assert study["durationMinutes"] == 30
        assert study["honorario"] == 12000
        assert study["active"] is True

    @pytest.mark.asyncio
    async def test_missing_study(self, db_session):
        with pytest.raises(NotFoundError):
            await StudyService(db_session).update_study("nope", {"name": "Rx"})


class TestObraSocialService:
    """Pruebas del servicio de obras sociales"""

    @pytest.mark.asyncio
    async def test_list_includes_inactive_by_default(self, db_session):
        service = ObraSocialService(db_session)
        await service.create_obra_social({"nombre": "OSDE"})
        await service.create_obra_social({"nombre": "IOMA", "activa": False})

        everyone = await service.list_obras_sociales()
        active = await service.list_obras_sociales(include_inactive=False)

        assert [obra["nombre"] for obra in everyone["obrasSociales"]] == ["IOMA", "OSDE"]
        assert [obra["nombre"] for obra in active["obrasSociales"]] == ["OSDE"]

    @pytest.mark.asyncio
    async def test_create_requires_nombre(self, db_session):
        with pytest.raises(InvalidRequestError) as exc_info:
            await ObraSocialService(db_session).create_obra_social({"codigo": "123"})
        assert exc_info.value.message == 'El campo "nombre" es obligatorio'

    @pytest.mark.asyncio
    async def test_update_without_fields(self, db_session):
        service = ObraSocialService(db_session)
        obra_id = (await service.create_obra_social({"nombre": "OSDE"}))["obraSocial"]["obraSocialId"]

        with pytest.raises(InvalidRequestError) as exc_info:
            await service.update_obra_social(obra_id, {})
        assert exc_info.value.message == "No se proporcionaron campos para actualizar"

    @pytest.mark.asyncio
    async def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await ObraSocialService(db_session).delete_obra_social("nope")
        assert exc_info.value.message == "Obra social no encontrada"
