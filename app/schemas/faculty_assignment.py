# app/schemas/faculty_assignment.py
from datetime import date, datetime, time
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


class FacultyRole(str, Enum):
    speaker = "speaker"
    chairperson = "chairperson"
    moderator = "moderator"
    panelist = "panelist"


class AssignmentResponseStatus(str, Enum):
    confirmed = "confirmed"
    declined = "declined"
    change_requested = "change_requested"


class FacultyAssignment(BaseModel):
    id: str
    event_id: str
    session_id: Optional[str] = None
    faculty_name: str
    faculty_email: Optional[str] = None
    faculty_phone: Optional[str] = None
    role: FacultyRole
    topic_title: Optional[str] = None
    session_name: Optional[str] = None
    session_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    hall: Optional[str] = None
    status: str
    response_notes: Optional[str] = None
    change_request_details: Optional[str] = None
    responded_at: Optional[datetime] = None
    invitation_sent_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SyncAssignmentsResponse(BaseModel):
    success: bool = True
    created: int
    skipped: int
    total: int
    firstError: Optional[str] = None
    sampleErrors: List[str] = []
    parseErrors: List[str] = []


class SendInvitationsRequest(BaseModel):
    assignmentIds: List[str]
    emailSubject: str = Field(..., min_length=1)
    emailBody: str = Field(..., min_length=1)
    whatsappTemplate: Optional[str] = None


class SendInvitationsResponse(BaseModel):
    success: bool
    sent: int
    failed: int
    errors: Optional[List[str]] = None


class FacultyContact(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class InvitationDetails(BaseModel):
    faculty: FacultyContact
    assignments: List[FacultyAssignment]
    event: Optional[Dict[str, Optional[Union[str, datetime]]]] = None


class InvitationResponseRequest(BaseModel):
    """
    Either `globalResponse` (applied to every assignment of the faculty
    member) or `responses` keyed by assignment id. With `responses`, `notes`
    may be a mapping of assignment id to note text.
    """

    globalResponse: Optional[AssignmentResponseStatus] = None
    responses: Optional[Dict[str, AssignmentResponseStatus]] = None
    notes: Optional[Union[str, Dict[str, str]]] = None

    @model_validator(mode="after")
    def check_response_present(self):
        if self.globalResponse is None and not self.responses:
            raise ValueError("Either globalResponse or responses must be provided")
        return self
