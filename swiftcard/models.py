from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass
class BusinessCard:
    """A saved contact. An empty id means the card has not been stored yet."""

    id: str = ""
    name: str = ""
    company: str = ""
    title: str = ""
    image_url: Optional[str] = None

    EDITABLE_FIELDS = ("name", "company", "title")

    def copy(self, **changes) -> "BusinessCard":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name or "",
            "company": self.company or "",
            "title": self.title or "",
            "imageURL": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessCard":
        image_url = data.get("imageURL", data.get("image_url"))
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or "").strip(),
            company=str(data.get("company") or "").strip(),
            title=str(data.get("title") or "").strip(),
            image_url=image_url or None,
        )

    @classmethod
    def from_fields(cls, fields: Dict[str, str], card_id: str = "") -> "BusinessCard":
        """Build a card from business-card extraction output."""
        return cls(
            id=card_id,
            name=fields.get("name", ""),
            company=fields.get("company", ""),
            title=fields.get("title", ""),
        )
