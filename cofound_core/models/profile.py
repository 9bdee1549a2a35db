"""Co-founder profile model (read-only view of a `profiles` row)."""

from dataclasses import dataclass
from typing import Optional


def _as_tuple(value) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(v) for v in value if v)


@dataclass(frozen=True)
class Profile:
    """Matching attributes of a user plus the linked Telegram chat id."""

    id: str
    full_name: Optional[str] = None
    roles: tuple[str, ...] = ()
    industries: tuple[str, ...] = ()
    commitment: Optional[str] = None
    idea_stage: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    languages: tuple[str, ...] = ()
    telegram_id: Optional[int] = None
    telegram_handle: Optional[str] = None
    avatar_url: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    skills: tuple[str, ...] = ()
    looking_for_roles: tuple[str, ...] = ()
    looking_for_description: Optional[str] = None
    ecosystem_tags: tuple[str, ...] = ()
    is_actively_looking: bool = True

    @property
    def has_linked_chat(self) -> bool:
        return self.telegram_id is not None

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        """Build a Profile from a Supabase `profiles` row."""
        telegram_id = row.get("telegram_id")
        return cls(
            id=str(row["id"]),
            full_name=row.get("full_name"),
            roles=_as_tuple(row.get("role")),
            industries=_as_tuple(row.get("industries")),
            commitment=row.get("commitment") or None,
            idea_stage=row.get("idea_stage") or None,
            country=row.get("country") or None,
            city=row.get("city") or None,
            languages=_as_tuple(row.get("languages")),
            # 0 is not a valid Telegram user id
            telegram_id=int(telegram_id) if telegram_id else None,
            telegram_handle=row.get("telegram_handle"),
            avatar_url=row.get("avatar_url"),
            headline=row.get("headline"),
            bio=row.get("bio"),
            skills=_as_tuple(row.get("skills")),
            looking_for_roles=_as_tuple(row.get("looking_for_roles")),
            looking_for_description=row.get("looking_for_description"),
            ecosystem_tags=_as_tuple(row.get("ecosystem_tags")),
            is_actively_looking=bool(row.get("is_actively_looking", True)),
        )

    def to_public_dict(self) -> dict:
        """Sanitised camelCase view returned by the matches endpoint."""
        return {
            "userId": self.id,
            "fullName": self.full_name,
            "avatarUrl": self.avatar_url,
            "headline": self.headline,
            "bio": self.bio,
            "role": list(self.roles),
            "skills": list(self.skills),
            "industries": list(self.industries),
            "country": self.country,
            "city": self.city,
            "languages": list(self.languages),
            "commitment": self.commitment,
            "ideaStage": self.idea_stage,
            "lookingForRoles": list(self.looking_for_roles),
            "lookingForDescription": self.looking_for_description,
            "ecosystemTags": list(self.ecosystem_tags),
        }
