"""Initial schema: events, ticketing, badges, print stations, faculty, notifications

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18

Creates every table of the command center, including the natural-key unique
constraints on registrations (event_id, registration_number) and faculty
assignments (session_id, faculty_name, role).
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated=True):
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("organization_id", sa.String(), nullable=False, index=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("short_name", sa.String(50), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=True),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        sa.Column("venue_name", sa.String(), nullable=True),
        sa.Column("registration_open", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    op.create_table(
        "ticket_types",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(3), nullable=False, server_default="INR"),
        sa.Column("tax_percentage", sa.Numeric(5, 2), nullable=False, server_default="18"),
        sa.Column("quantity_total", sa.Integer(), nullable=True),
        sa.Column("quantity_sold", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("min_per_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_per_order", sa.Integer(), nullable=False, server_default="10"),
        sa.Column(
            "status",
            sa.Enum("active", "hidden", "soldout", "disabled", name="ticket_status_enum"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("requires_approval", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "registrations",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id"), nullable=False, index=True),
        sa.Column("ticket_type_id", sa.String(), sa.ForeignKey("ticket_types.id"), nullable=False, index=True),
        sa.Column("registration_number", sa.String(50), nullable=False, index=True),
        sa.Column("attendee_name", sa.String(255), nullable=False),
        sa.Column("attendee_email", sa.String(255), nullable=False, index=True),
        sa.Column("attendee_phone", sa.String(20), nullable=True),
        sa.Column("attendee_institution", sa.String(255), nullable=True),
        sa.Column("attendee_designation", sa.String(255), nullable=True),
        sa.Column("attendee_city", sa.String(100), nullable=True),
        sa.Column("attendee_country", sa.String(100), nullable=True, server_default="India"),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(3), nullable=False, server_default="INR"),
        sa.Column(
            "status",
            sa.Enum("pending", "confirmed", "cancelled", "refunded", name="registration_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("payment_method", sa.String(30), nullable=False, server_default="free"),
        sa.Column("source", sa.String(20), nullable=False, server_default="web"),
        sa.Column("checked_in", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("checked_in_by", sa.String(), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("custom_fields", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("event_id", "registration_number", name="uq_registration_event_number"),
    )

    op.create_table(
        "badge_templates",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("size", sa.String(20), nullable=False, server_default="4x3"),
        sa.Column("template_image_url", sa.String(), nullable=True),
        sa.Column("template_data", sa.JSON(), nullable=True),
        sa.Column("ticket_type_ids", sa.JSON(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("locked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("locked_by", sa.String(), nullable=True),
        sa.Column("badges_generated_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "print_stations",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("print_mode", sa.String(30), nullable=False, server_default="full_badge"),
        sa.Column(
            "badge_template_id",
            sa.String(),
            sa.ForeignKey("badge_templates.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("print_settings", sa.JSON(), nullable=True),
        sa.Column("allow_reprint", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("max_reprints", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("auto_print", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("require_checkin", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("ticket_type_ids", sa.JSON(), nullable=True),
        sa.Column("access_token", sa.String(64), nullable=False, unique=True, index=True),
        sa.Column("token_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "print_jobs",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "print_station_id",
            sa.String(),
            sa.ForeignKey("print_stations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "registration_id",
            sa.String(),
            sa.ForeignKey("registrations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("print_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="completed"),
        sa.Column("printed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("device_info", sa.JSON(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index(
        "idx_print_jobs_station_registration",
        "print_jobs",
        ["print_station_id", "registration_id"],
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id"), nullable=False, index=True),
        sa.Column("session_name", sa.String(), nullable=True),
        sa.Column("session_date", sa.Date(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("hall", sa.String(), nullable=True),
        sa.Column("specialty_track", sa.String(), nullable=True),
        sa.Column("speakers_text", sa.Text(), nullable=True),
        sa.Column("chairpersons_text", sa.Text(), nullable=True),
        sa.Column("moderators_text", sa.Text(), nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "faculty_assignments",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("session_id", sa.String(), sa.ForeignKey("sessions.id", ondelete="CASCADE"), nullable=True, index=True),
        sa.Column("faculty_name", sa.String(), nullable=False),
        sa.Column("faculty_email", sa.String(), nullable=True, index=True),
        sa.Column("faculty_phone", sa.String(), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("topic_title", sa.String(), nullable=True),
        sa.Column("session_name", sa.String(), nullable=True),
        sa.Column("session_date", sa.Date(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("hall", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("response_notes", sa.Text(), nullable=True),
        sa.Column("change_request_details", sa.Text(), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invitation_token", sa.String(64), nullable=True, unique=True, index=True),
        sa.Column("invitation_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reminder_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint(
            "session_id", "faculty_name", "role", name="uq_faculty_assignment_natural_key"
        ),
    )

    op.create_table(
        "notification_logs",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("event_id", sa.String(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=True, index=True),
        sa.Column(
            "registration_id",
            sa.String(),
            sa.ForeignKey("registrations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "assignment_id",
            sa.String(),
            sa.ForeignKey("faculty_assignments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("channel", sa.String(20), nullable=False),
        sa.Column("notification_type", sa.String(50), nullable=False, index=True),
        sa.Column("recipient", sa.String(255), nullable=True),
        sa.Column("subject", sa.String(), nullable=True),
        sa.Column("body_preview", sa.String(200), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("provider", sa.String(30), nullable=True),
        sa.Column("external_id", sa.String(255), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index(
        "idx_notification_logs_status_created",
        "notification_logs",
        ["status", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_notification_logs_status_created", table_name="notification_logs")
    op.drop_table("notification_logs")
    op.drop_table("faculty_assignments")
    op.drop_table("sessions")
    op.drop_index("idx_print_jobs_station_registration", table_name="print_jobs")
    op.drop_table("print_jobs")
    op.drop_table("print_stations")
    op.drop_table("badge_templates")
    op.drop_table("registrations")
    op.drop_table("ticket_types")
    op.drop_table("events")
    sa.Enum(name="registration_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="ticket_status_enum").drop(op.get_bind(), checkfirst=True)
