# server/launcher/models/app_entry.py

import uuid
from typing import Optional

from launcher.extensions import db


class AppEntry(db.Model):
    __tablename__ = "apps"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = db.Column(db.Text, nullable=False)
    url = db.Column(db.Text, nullable=False)
    category = db.Column(db.Text, nullable=True)

    position = db.Column(db.Integer, default=0, nullable=False)

    def __init__(
        self,
        name: str,
        url: str,
        category: Optional[str] = None,
        position: int = 0,
        id: Optional[str] = None,
    ):
        # Assigned eagerly so entries held outside a session still carry an id
        self.id = id or str(uuid.uuid4())
        self.name = name
        self.url = url
        self.category = category
        self.position = position

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "category": self.category,
            "position": self.position,
        }

    def __repr__(self) -> str:
        return f"<AppEntry {self.name} ({self.id[:8]})>"
