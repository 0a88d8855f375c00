"""
Plain value types shared by stores, the core components and the runners.

Store implementations hand out these detached records, never ORM rows or
raw JSON, so the core never depends on how a store persists data.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserCredentials:
    """Username + password pair used for provisioning and login."""

    username: str
    password: str = field(repr=False)

    def to_dict(self) -> dict:
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class UserRecord:
    """A provisioned user as seen from outside the store (no secret)."""

    username: str


@dataclass(frozen=True)
class BlogRecord:
    """
    Snapshot of a blog at the time it was read.

    `creator` is the username recorded at creation and never changes.
    """

    id: int
    title: str
    author: str
    url: str
    likes: int
    creator: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "url": self.url,
            "likes": self.likes,
            "creator": self.creator,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BlogRecord":
        return cls(
            id=int(data["id"]),
            title=data["title"],
            author=data.get("author", ""),
            url=data.get("url", ""),
            likes=int(data.get("likes", 0)),
            creator=data["creator"],
        )
