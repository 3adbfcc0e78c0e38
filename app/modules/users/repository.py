# app/modules/users/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import User
from app.shared.database.store import Collection

def escape_like(fragment: str, escape: str = "\\") -> str:
    """Tratar % y _ del usuario como literales en LIKE"""
    return (
        fragment.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )

class UsersRepository:
    def __init__(self, db: Session):
        self.db = db
        self.users = Collection(db, User, filter_fields=("email", "role"))

    def get_by_email(self, email: str) -> Optional[User]:
        return self.users.find_one({"email": email})

    def search_by_email(self, fragment: str, limit: int = 10) -> List[User]:
        """Búsqueda parcial, sin distinguir mayúsculas"""
        return (
            self.db.query(User)
            .filter(User.email.ilike(f"%{escape_like(fragment)}%", escape="\\"))
            .order_by(User.email.asc())
            .limit(limit)
            .all()
        )
