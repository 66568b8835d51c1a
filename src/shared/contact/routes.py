"""Contact routes for receiving portfolio contact form messages."""

import math
import logging
from fastapi import APIRouter, Depends, Request, Query, status
from sqlalchemy.orm import Session

from src.shared.admin.dependencies import verify_admin_secret
from src.shared.contact.schemas import (
    ContactRequest,
    ContactResponse,
    ContactMessageResponse,
    MessagesPagination,
    MessagesResponse,
)
from src.shared.contact.database import ContactMessage
from src.shared.contact.email_utils import send_contact_notification
from src.shared.database import get_db, utcnow
from src.shared.errors import PersistenceError, NotificationError
from src.shared.event_log.log_utils import record_event
from src.shared.input_validation import (
    validate_required_text,
    validate_email,
    MAX_NAME_LENGTH,
    MAX_MESSAGE_LENGTH,
)
from src.shared.request_utils import get_client_ip, get_user_agent, get_referrer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])

SUCCESS_MESSAGE = "Message sent successfully!"
SUBMISSION_EVENT = "contact_form_submitted"
MAX_PAGE = 1_000_000


def _submission_log_data(name: str, email: str, message: str, notified: bool) -> dict:
    """Describe a submission without storing the message body."""
    return {
        "name_length": len(name),
        "message_length": len(message),
        "email_domain": email.rsplit("@", 1)[-1],
        "notified": notified,
    }


@router.post("/send-email", response_model=ContactResponse, status_code=status.HTTP_200_OK)
def submit_contact_form(
    contact_data: ContactRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Store a contact form message and notify the site owner by email.

    - Validation failures return 400 before anything is stored or sent
    - The stored message is kept even when the notification email fails
    - A length-only summary of the submission is appended to the event log
    """
    name = validate_required_text(contact_data.name, "Name", max_length=MAX_NAME_LENGTH)
    email = validate_email(contact_data.email)
    message = validate_required_text(contact_data.message, "Message", max_length=MAX_MESSAGE_LENGTH)

    contact_message = ContactMessage(name=name, email=email, message=message, created_at=utcnow())
    try:
        db.add(contact_message)
        db.commit()
        db.refresh(contact_message)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store contact message from {email}: {str(e)}", exc_info=True)
        raise PersistenceError()

    # Read before record_event commits or rolls back and expires the instance
    message_id = contact_message.id
    received_at = contact_message.created_at
    logger.info(f"Stored contact message {message_id} from {email}")

    notified = send_contact_notification(
        name=name,
        email=email,
        message=message,
        received_at=received_at,
    )

    record_event(
        db,
        SUBMISSION_EVENT,
        session_id=request.headers.get("X-Session-ID"),
        data=_submission_log_data(name, email, message, notified),
        url=str(request.url),
        user_agent=get_user_agent(request),
        ip_address=get_client_ip(request),
        referrer=get_referrer(request),
    )

    if not notified:
        logger.warning(f"Contact message {message_id} stored but notification failed")
        raise NotificationError()

    return ContactResponse(success=True, message=SUCCESS_MESSAGE)


@router.get("/messages", response_model=MessagesResponse)
def list_messages(
    limit: int = Query(50, ge=1, le=100),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    db: Session = Depends(get_db),
    _admin: None = Depends(verify_admin_secret),
):
    """Paginated stored contact messages, newest first."""
    query = db.query(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())

    total_messages = query.count()
    messages = query.offset((page - 1) * limit).limit(limit).all()

    return MessagesResponse(
        messages=[
            ContactMessageResponse(
                id=m.id,
                name=m.name,
                email=m.email,
                message=m.message,
                created_at=m.created_at,
            )
            for m in messages
        ],
        pagination=MessagesPagination(
            current=page,
            total=math.ceil(total_messages / limit),
            count=len(messages),
            total_messages=total_messages,
        ),
    )
