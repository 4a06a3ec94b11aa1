import sys

from student_manager.config import load_settings
from student_manager.crud import StudentRepository, UserRepository
from student_manager.database import ConnectionProvider


def check_database_connection(settings=None):
    """Test database connection and check if data exists"""
    settings = settings or load_settings()

    missing = settings.missing_keys()
    if missing:
        print(f"❌ Missing configuration: {', '.join(missing)}")
        return False

    provider = ConnectionProvider(settings)
    try:
        print("🔗 Connecting to database...")
        print(f"Database URL: {settings.sqlalchemy_url.render_as_string(hide_password=True)[:50]}...")

        if not provider.test_connection():
            print("❌ Database connection failed")
            return False
        print("✅ Database connection successful!")

        users = UserRepository(provider).count()
        if users:
            print(f"👥 Found {users.value} users in database")
            if users.value == 0:
                print("⚠️  No users found, run create_users.py")
        else:
            print(f"❌ Error checking users table: {users.message}")

        students = StudentRepository(provider).count()
        if students:
            print(f"🎓 Found {students.value} students in database")
        else:
            print(f"❌ Error checking students table: {students.message}")

        return True
    finally:
        provider.dispose()


if __name__ == "__main__":
    success = check_database_connection()
    sys.exit(0 if success else 1)
