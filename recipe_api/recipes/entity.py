from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

LIST_FIELDS = ("ingredients", "instructions")
MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 255


def _clean_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _clean_items(items: Any) -> Any:
    """
    Trims every entry and drops the ones left blank.
    """
    if not isinstance(items, (list, tuple)):
        return items
    cleaned = []
    for item in items:
        item = _clean_text(item)
        if item is None or item == "":
            continue
        cleaned.append(item)
    return cleaned


def _copy_items(items: Any) -> Any:
    return list(items) if isinstance(items, (list, tuple)) else items


@dataclass
class Recipe:
    """
    A recipe as the application sees it, independent of HTTP and storage.

    Instances are built from loosely typed input and may hold invalid
    values until :meth:`validate` has been consulted. ``ingredients`` and
    ``instructions`` are always expected to be sequences of strings.
    """

    id: Optional[int] = None
    title: Any = ""
    description: Optional[str] = None
    ingredients: Any = field(default_factory=list)
    instructions: Any = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> "Recipe":
        """
        Builds a recipe from a mapping. Missing or null fields fall back to
        their defaults; this never raises for bad values.
        """
        data = data or {}

        def pick(name, default):
            value = data.get(name)
            return default if value is None else value

        return cls(
            id=data.get("id"),
            title=pick("title", ""),
            description=data.get("description"),
            ingredients=pick("ingredients", []),
            instructions=pick("instructions", []),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @staticmethod
    def schema() -> Dict[str, str]:
        return {
            "id": "number",
            "title": "string",
            "description": "string|null",
            "ingredients": "array",
            "instructions": "array",
            "created_at": "datetime",
            "updated_at": "datetime",
        }

    @staticmethod
    def required_fields() -> List[str]:
        return ["title", *LIST_FIELDS]

    def validate(self) -> List[str]:
        """
        Returns every rule violation, in rule order. An empty list means
        the recipe can be stored.
        """
        errors = []

        # required fields
        for name in self.required_fields():
            value = getattr(self, name)
            if name == "title":
                missing = not isinstance(value, str) or not value.strip()
            elif isinstance(value, (list, tuple)):
                missing = not _clean_items(value)
            else:
                missing = value is None or value == ""
            if missing:
                errors.append(f"{name} is required")

        # array types
        for name in LIST_FIELDS:
            value = getattr(self, name)
            if value not in (None, "") and not isinstance(value, (list, tuple)):
                errors.append(f"{name} must be an array")

        # title length, only once a title was given
        if isinstance(self.title, str) and self.title.strip():
            if len(self.title.strip()) < MIN_TITLE_LENGTH:
                errors.append(
                    f"Title must be at least {MIN_TITLE_LENGTH} characters"
                )
            elif len(self.title.strip()) > MAX_TITLE_LENGTH:
                errors.append(
                    f"Title must be at most {MAX_TITLE_LENGTH} characters"
                )

        # entries
        for name in LIST_FIELDS:
            value = getattr(self, name)
            if isinstance(value, (list, tuple)) and any(
                item is not None and not isinstance(item, str) for item in value
            ):
                errors.append(f"{name} must contain only text entries")

        return errors

    def to_api_view(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": _copy_items(self.ingredients),
            "instructions": _copy_items(self.instructions),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_storage_view(self) -> Dict[str, Any]:
        """
        The API view with text trimmed and blank list entries removed.
        A blank description is stored as null.
        """
        description = _clean_text(self.description)
        return {
            "id": self.id,
            "title": _clean_text(self.title),
            "description": description or None,
            "ingredients": _clean_items(self.ingredients),
            "instructions": _clean_items(self.instructions),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
