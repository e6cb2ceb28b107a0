import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "please-set-ADMIN_PASSWORD")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")

SEED_DEMO_EXAMS = bool(int(os.getenv("SEED_DEMO_EXAMS", "0")))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

EXAM_CENTER = os.getenv("EXAM_CENTER", "Main Examination Hall, Building A")
REPORTING_TIME = os.getenv("REPORTING_TIME", "08:30 AM")
