"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

# Payload encoded in the printed office QR code.
DEFAULT_QR_TOKEN = '{"companyId": "TimeGuard-Demo", "action": "attendance-scan"}'

TIMESHEET_CSV_HEADER = ("Employee Name", "Date", "Check In", "Check Out", "Total Hours Worked")

DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"
DEFAULT_IP_LOOKUP_TIMEOUT = 5

# Column widths of attendance_events (database/schema.sql)
MAX_IP_LENGTH = 64
MAX_LOCATION_ERROR_LENGTH = 255
