# app/models/__init__.py
# Import all models to ensure SQLAlchemy can resolve relationships
# Order matters for dependencies - import base models first

from app.db.base_class import Base
from app.models.event import Event
from app.models.ticket_type import TicketType
from app.models.registration import Registration
from app.models.badge_template import BadgeTemplate
from app.models.print_station import PrintStation
from app.models.print_job import PrintJob
from app.models.session import ProgramSession
from app.models.faculty_assignment import FacultyAssignment
from app.models.notification_log import NotificationLog
