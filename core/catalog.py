"""
Sweet ideas catalog.

The catalog is a static, versioned YAML file loaded once at startup.
An empty or malformed catalog is a configuration error and stops startup.
"""

import random
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

import yaml

from .config import get_catalog_path

DEFAULT_CATALOG_PATH = Path(__file__).parent / "sweet_ideas.yaml"

REQUIRED_FIELDS = ("id", "title", "description", "category")


class CatalogError(Exception):
    """The catalog file is missing, malformed or unusable."""


class EmptyCatalogError(CatalogError):
    """The catalog has no ideas to choose from."""


@dataclass(frozen=True)
class CatalogItem:
    id: int
    title: str
    description: str
    category: str

    @property
    def category_label(self) -> str:
        """Category for display: `quality_time` -> `quality time`."""
        return self.category.replace("_", " ")


class Catalog:
    """Read-only set of ideas with uniform random sampling."""

    def __init__(
        self,
        items: list[CatalogItem],
        version: int | None = None,
        rng: random.Random | None = None,
    ):
        if not items:
            raise EmptyCatalogError("Catalog contains no ideas")
        self._items = tuple(items)
        self.version = version
        self._rng = rng or random

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def sample(self) -> CatalogItem:
        """Pick one idea uniformly at random, with replacement."""
        return self._rng.choice(self._items)

    def categories(self) -> dict[str, int]:
        """Number of ideas per category."""
        return dict(Counter(item.category for item in self._items))


def parse_catalog(data: dict, rng: random.Random | None = None) -> Catalog:
    """
    Build a Catalog from the parsed YAML document.

    Raises:
        CatalogError: If the document structure or any idea is invalid
    """
    if not isinstance(data, dict) or not isinstance(data.get("ideas"), list):
        raise CatalogError("Catalog must be a mapping with an 'ideas' list")

    items = []
    seen_ids = set()
    for index, idea in enumerate(data["ideas"]):
        if not isinstance(idea, dict) or any(not idea.get(f) for f in REQUIRED_FIELDS):
            raise CatalogError(f"Invalid idea at index {index}: missing required fields")
        try:
            idea_id = int(idea["id"])
        except (TypeError, ValueError):
            raise CatalogError(f"Invalid idea at index {index}: id must be an integer")
        if idea_id in seen_ids:
            raise CatalogError(f"Duplicate idea id {idea_id} at index {index}")
        seen_ids.add(idea_id)
        items.append(
            CatalogItem(
                id=idea_id,
                title=str(idea["title"]),
                description=str(idea["description"]),
                category=str(idea["category"]),
            )
        )

    return Catalog(items, version=data.get("version"), rng=rng)


def load_catalog(path: Path | None = None, rng: random.Random | None = None) -> Catalog:
    """Load and validate the catalog from YAML."""
    path = path or get_catalog_path() or DEFAULT_CATALOG_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {path}")
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file {path} is not valid YAML: {e}")

    return parse_catalog(data, rng=rng)


_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """
    Load the catalog once and cache it for the life of the process.
    """
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
