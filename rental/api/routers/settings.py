from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rental.api.deps import get_db, require_roles
from rental.core import messages
from rental.schemas.common import MessageResponse
from rental.schemas.notification import NotificationSettings, NotificationSettingsUpdate
from rental.services.notification_settings import get_settings, update_settings

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("/notifications", response_model=NotificationSettings)
def get_notification_settings(db: Session = Depends(get_db)):
    return get_settings(db)


@router.api_route("/notifications", methods=["PUT", "POST"], response_model=MessageResponse)
def save_notification_settings(
    settings_data: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Save which channels are active and where they deliver."""
    update_settings(db, settings_data)
    return MessageResponse(message=messages.SETTINGS_SAVED)
