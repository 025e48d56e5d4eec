"""
Single source of truth for database tables that exist after migrations.

Use these names when writing raw SQL (e.g. TRUNCATE). Order matters for FK: bookings before slots.
"""
# All tables that exist in the DB. Must match models and migrations.
ALL_TABLE_NAMES = (
    "bookings",
    "slots",
    "subjects",
)
