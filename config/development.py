import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Seeded admin account (the only way to get an admin)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "password")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")

SEED_DEMO_EXAMS = bool(int(os.getenv("SEED_DEMO_EXAMS", "1")))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

EXAM_CENTER = os.getenv("EXAM_CENTER", "Main Examination Hall, Building A")
REPORTING_TIME = os.getenv("REPORTING_TIME", "08:30 AM")
