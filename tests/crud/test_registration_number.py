import pytest
from sqlalchemy.orm import Session

from app.crud import crud_registration
from app.crud.crud_registration import format_registration_number
from tests.utils.event import create_random_event, create_registration, create_ticket_type


@pytest.mark.parametrize(
    "latest, expected",
    [
        (None, "AMASI-0001"),
        ("AMASI-0041", "AMASI-0042"),
        ("AMASI-9999", "AMASI-10000"),
        ("IMPORTED", "AMASI-0001"),
    ],
)
def test_format_registration_number(latest, expected):
    assert format_registration_number("AMASI", latest) == expected


def test_next_registration_number_uses_short_name(db: Session):
    event = create_random_event(db, short_name="CONFB")
    ticket = create_ticket_type(db, event)

    assert crud_registration.registration.next_registration_number(db, event=event) == "CONFB-0001"

    create_registration(db, event, ticket, registration_number="CONFB-0007")
    assert crud_registration.registration.next_registration_number(db, event=event) == "CONFB-0008"


def test_get_multi_by_event_filters(db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    create_registration(
        db, event, ticket, registration_number="T-0001", attendee_name="Dr. Meera Shah"
    )
    create_registration(
        db,
        event,
        ticket,
        registration_number="T-0002",
        status="pending",
        attendee_email="other@example.com",
    )

    by_status = crud_registration.registration.get_multi_by_event(
        db, event_id=event.id, status="pending"
    )
    by_search = crud_registration.registration.get_multi_by_event(
        db, event_id=event.id, search="meera"
    )

    assert [r.registration_number for r in by_status] == ["T-0002"]
    assert [r.registration_number for r in by_search] == ["T-0001"]
    assert crud_registration.registration.count_confirmed_by_event(db, event_id=event.id) == 1


def test_next_number_follows_highest_suffix_not_newest_row(db: Session):
    event = create_random_event(db, short_name="CONFB")
    ticket = create_ticket_type(db, event)
    create_registration(db, event, ticket, registration_number="CONFB-0009")
    create_registration(
        db, event, ticket, registration_number="CONFB-0002", attendee_email="b@example.com"
    )

    assert crud_registration.registration.next_registration_number(db, event=event) == "CONFB-0010"
