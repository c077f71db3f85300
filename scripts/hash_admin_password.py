"""Script to generate the administration password hash."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.services.auth_service import AuthService


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/hash_admin_password.py <password>")
        sys.exit(1)

    print(f"ADMIN_PASSWORD_HASH={AuthService.hash_password(sys.argv[1])}")
