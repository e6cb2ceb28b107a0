SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password"
ADMIN_NAME = "Admin User"

SEED_DEMO_EXAMS = True
SESSION_DAYS = 7

EXAM_CENTER = "Main Examination Hall, Building A"
REPORTING_TIME = "08:30 AM"
