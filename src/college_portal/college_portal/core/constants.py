"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ALERT_THRESHOLD = 75
GOOD_STANDING_MIN = 75
WARNING_STANDING_MIN = 60
LATE_WEIGHT = 0.5

ALL_SUBJECTS = "All Subjects"
ALL_MONTHS = "All Months"

# Fixed keys in the key-value store.
ATTENDANCE_KEY = "attendanceRecords"
STUDENTS_KEY = "students"
CIRCULARS_KEY = "circulars"
