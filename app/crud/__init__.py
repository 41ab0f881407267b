# app/crud/__init__.py

from .crud_badge_template import badge_template
from .crud_event import event
from .crud_faculty_assignment import faculty_assignment
from .crud_print_station import print_station
from .crud_registration import registration
from .crud_session import session
from .crud_ticket_type import ticket_type
