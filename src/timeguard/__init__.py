"""TimeGuard: QR code attendance tracking.

Organized by feature modules (users, attendance, timesheet) with a thin Flask
controller layer over service and repository layers.
"""

from .main import create_app

__all__ = ["create_app"]
