"""
Centralized constants for the scheduler and API.

Change job IDs or header names here instead of scattering literals across main and routes.
"""
# Scheduler job IDs (must match ids used in main.py add_job)
ROLLING_WINDOW_JOB_ID = "calendar_rolling_window"

# Headers forwarded by the identity layer after it has verified a credential
SUBJECT_ID_HEADER = "X-Subject-Id"
SUBJECT_ROLE_HEADER = "X-Subject-Role"
ADMIN_ROLE = "admin"

# Column width of bookings.subject_id and subjects.id
SUBJECT_ID_MAX_LENGTH = 128
