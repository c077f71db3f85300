"""Unit tests for volunteer service."""
import pytest
from datetime import date
from sqlalchemy.orm import Session

from app.exceptions import DuplicateVolunteerError, MissingFieldError, ResourceNotFoundError
from app.models.shift import Shift
from app.models.volunteer import Volunteer
from app.services.volunteer_service import VolunteerService


class TestVolunteerService:
    """Test cases for VolunteerService."""

    def test_create_volunteer(self, test_db: Session):
        service = VolunteerService(test_db)
        volunteer = service.create_volunteer(12, "  Esposito ", "Giulia", fiscal_code="SPSGLI90")

        assert volunteer.card_id == 12
        assert volunteer.surname == "Esposito"
        assert volunteer.disabled is False
        assert service.get_volunteer(12) is not None

    def test_create_duplicate_card(self, test_db: Session, volunteer: Volunteer):
        with pytest.raises(DuplicateVolunteerError) as exc_info:
            VolunteerService(test_db).create_volunteer(7, "Neri", "Paolo")
        assert exc_info.value.details["card_id"] == 7

    @pytest.mark.parametrize("surname,name,field", [
        ("", "Paolo", "surname"),
        ("Neri", "   ", "name"),
    ])
    def test_create_missing_field(self, test_db: Session, surname, name, field):
        with pytest.raises(MissingFieldError) as exc_info:
            VolunteerService(test_db).create_volunteer(20, surname, name)
        assert exc_info.value.details["field_name"] == field

    def test_list_is_ordered_by_card(self, test_db: Session, volunteer: Volunteer):
        service = VolunteerService(test_db)
        service.create_volunteer(3, "Neri", "Paolo")
        service.create_volunteer(11, "Gallo", "Sara")

        assert [v.card_id for v in service.list_volunteers()] == [3, 7, 11]

    def test_update_only_given_fields(self, test_db: Session, volunteer: Volunteer):
        updated = VolunteerService(test_db).update_volunteer(7, name="Marco")

        assert updated.name == "Marco"
        assert updated.surname == "Rossi"

    def test_set_disabled(self, test_db: Session, volunteer: Volunteer):
        assert VolunteerService(test_db).set_disabled(7, True).disabled is True

    def test_update_unknown(self, test_db: Session):
        with pytest.raises(ResourceNotFoundError):
            VolunteerService(test_db).update_volunteer(99, name="X")

    def test_delete_removes_shifts(self, test_db: Session, volunteer: Volunteer):
        test_db.add(Shift(shift_date=date(2024, 1, 4), task=0, card_id=7))
        test_db.commit()

        VolunteerService(test_db).delete_volunteer(7)

        assert test_db.get(Volunteer, 7) is None
        assert test_db.query(Shift).count() == 0

    def test_display_name(self, test_db: Session, volunteer: Volunteer):
        service = VolunteerService(test_db)
        assert service.get_display_name(7) == "Ciao Mario!"
        assert service.get_display_name(7, is_admin=True) == "(7) Rossi Mario"
