from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import rental.repositories.notification_settings as settings_repo
from rental.api.deps import get_db, get_notifier, require_roles
from rental.core import messages
from rental.schemas.common import MessageResponse
from rental.schemas.notification import NotificationTest
from rental.services.notification import NotificationDispatcher, send_test_notification

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.post("/test", response_model=MessageResponse)
async def test_notification(
    request: NotificationTest,
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """
    Send a test message through one channel.

    Unlike workflow notifications, failures here are returned to the caller.
    """
    stored = settings_repo.get_notification_settings(db)
    await send_test_notification(notifier, request.channel, request.recipient, stored)
    return MessageResponse(message=messages.TEST_SENT)
