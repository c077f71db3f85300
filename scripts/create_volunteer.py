"""Script to register a volunteer."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal, init_db
from app.exceptions import ValidationError
from app.services.volunteer_service import VolunteerService


def create_volunteer(card_id: int, surname: str, name: str, fiscal_code: str = ""):
    """
    Register a volunteer.

    Args:
        card_id: Membership card number
        surname: Surname
        name: First name
        fiscal_code: Fiscal code
    """
    init_db()
    db = SessionLocal()
    try:
        volunteer = VolunteerService(db).create_volunteer(card_id, surname, name, fiscal_code)
        print("Volunteer created successfully!")
        print(f"Card: {volunteer.card_id}")
        print(f"Name: {volunteer.full_name}")
    except ValidationError as e:
        print(f"Error creating volunteer: {e.message}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) not in (4, 5):
        print("Usage: python scripts/create_volunteer.py <card_id> <surname> <name> [fiscal_code]")
        sys.exit(1)

    create_volunteer(int(sys.argv[1]), sys.argv[2], sys.argv[3], *sys.argv[4:])
