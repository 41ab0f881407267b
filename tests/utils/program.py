from datetime import date, time

from sqlalchemy.orm import Session

from app.crud import crud_session
from app.models.event import Event
from app.models.session import ProgramSession
from app.schemas.session import ProgramSessionCreate


def create_program_session(
    db: Session,
    event: Event,
    session_name: str = "Hernia Masterclass",
    start_time: time = time(9, 30),
    end_time: time = time(10, 15),
    speakers_text: str = None,
    chairpersons_text: str = None,
    moderators_text: str = None,
) -> ProgramSession:
    session_in = ProgramSessionCreate(
        session_name=session_name,
        session_date=date(2026, 3, 14),
        start_time=start_time,
        end_time=end_time,
        hall="Hall A",
        speakers_text=speakers_text,
        chairpersons_text=chairpersons_text,
        moderators_text=moderators_text,
    )
    return crud_session.session.create_with_event(db, obj_in=session_in, event_id=event.id)
