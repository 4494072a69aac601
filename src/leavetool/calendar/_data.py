"""
Built-in holiday table, 2024 edition through 2026.

Extend both tuples (and bump ``VERSION``) before the first payroll run of a
new year; dates outside the table never earn a bonus.
"""

VERSION = "2024-2026"

REST_WEEKDAYS = ("Tue", "Wed")

# Public holidays: +1 day each, whatever the weekday.
NORMAL_HOLIDAYS = (
    # 2024
    "2024-01-01",                   # New Year's Day
    "2024-03-01",                   # Independence Movement Day
    "2024-04-10",                   # general election
    "2024-05-05", "2024-05-06",     # Children's Day, substitute
    "2024-05-15",                   # Buddha's Birthday
    "2024-06-06",                   # Memorial Day
    "2024-08-15",                   # Liberation Day
    "2024-10-01",                   # Armed Forces Day (one-off)
    "2024-10-03",                   # National Foundation Day
    "2024-10-09",                   # Hangul Day
    "2024-12-25",                   # Christmas
    # 2025
    "2025-01-01",
    "2025-03-01", "2025-03-03",
    "2025-05-05", "2025-05-06",
    "2025-06-06",
    "2025-08-15",
    "2025-10-03",
    "2025-10-09",
    "2025-12-25",
    # 2026
    "2026-01-01",
    "2026-03-01", "2026-03-02",
    "2026-05-05", "2026-05-06",
    "2026-05-24", "2026-05-25",
    "2026-06-06",
    "2026-08-15",
    "2026-10-03",
    "2026-10-09",
    "2026-12-25",
)

# Lunar New Year and Chuseok clusters: the studio closes anyway, so only days
# that land on a regular rest day earn a bonus.
MAJOR_HOLIDAYS = (
    # 2024
    "2024-02-09", "2024-02-10", "2024-02-11", "2024-02-12",
    "2024-09-16", "2024-09-17", "2024-09-18",
    # 2025
    "2025-01-28", "2025-01-29", "2025-01-30",
    "2025-10-05", "2025-10-06", "2025-10-07", "2025-10-08",
    # 2026
    "2026-02-17", "2026-02-18", "2026-02-19",
    "2026-09-24", "2026-09-25", "2026-09-26",
)
