from sqlalchemy.orm import Session

from rental.db.models.user import User as UserModel


def get_user_by_username_and_role(
    db: Session, username: str, role: str
) -> UserModel | None:
    """Get a user by username and role."""
    return (
        db.query(UserModel)
        .filter(UserModel.username == username, UserModel.role == role)
        .first()
    )

