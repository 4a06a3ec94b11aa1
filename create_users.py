import os
import sys

from student_manager.config import load_settings
from student_manager.database import ConnectionProvider
from student_manager.crud import UserRepository
from student_manager.services import AuthService


def create_initial_users(settings=None):
    """Create the initial login for the student management system"""
    settings = settings or load_settings()
    provider = ConnectionProvider(settings)

    try:
        if not provider.init_db():
            print("❌ Could not create tables, check DATABASE_URL")
            return False

        users = UserRepository(provider)
        existing_users = users.count()
        if not existing_users:
            print(f"❌ Error checking users: {existing_users.message}")
            return False
        if existing_users.value > 0:
            print(f"✅ Database already has {existing_users.value} users")
            return True

        username = os.getenv("INITIAL_ADMIN_USERNAME", "admin")
        password = os.getenv("INITIAL_ADMIN_PASSWORD", "admin123")

        outcome = AuthService(users).register(username, password, password)
        if not outcome:
            print(f"❌ Error creating user: {outcome.message}")
            return False

        print("\n🎉 Successfully created initial user!")
        print("\n📋 Login Credentials:")
        print("=" * 50)
        print(f"Username: {username}")
        print(f"Password: {password}")
        print("-" * 30)
        return True
    finally:
        provider.dispose()


if __name__ == "__main__":
    success = create_initial_users()
    sys.exit(0 if success else 1)
