"""Seed categories.

Category ids are derived from their slugs so every environment (migrated
database or in-memory store) agrees on them.
"""

from uuid import NAMESPACE_URL, UUID, uuid5

from topten.domain.model import Category
from topten.domain.value import CategoryId

CATEGORY_NAMESPACE = uuid5(NAMESPACE_URL, "topten:category")

# (name, slug, description, icon)
DEFAULT_CATEGORIES: list[tuple[str, str, str, str]] = [
    ("Movies", "movies", "Top ten lists about movies, films, and cinema", "🎬"),
    ("Music", "music", "Top ten lists about songs, albums, artists, and bands", "🎵"),
    ("Books", "books", "Top ten lists about books, novels, and literature", "📚"),
    ("TV Shows", "tv-shows", "Top ten lists about television series and shows", "📺"),
    ("Video Games", "video-games", "Top ten lists about video games and gaming", "🎮"),
    (
        "Food & Drinks",
        "food-drinks",
        "Top ten lists about food, restaurants, and beverages",
        "🍕",
    ),
    ("Sports", "sports", "Top ten lists about sports, athletes, and teams", "⚽"),
    ("Travel", "travel", "Top ten lists about travel destinations and places", "✈️"),
    (
        "Technology",
        "technology",
        "Top ten lists about tech, gadgets, and innovation",
        "💻",
    ),
    ("Fashion", "fashion", "Top ten lists about fashion, style, and trends", "👗"),
    ("Animals", "animals", "Top ten lists about animals and wildlife", "🐾"),
    ("History", "history", "Top ten lists about historical events and figures", "🏛️"),
    ("Science", "science", "Top ten lists about science and discoveries", "🔬"),
    ("Art", "art", "Top ten lists about art, artists, and creativity", "🎨"),
    ("Other", "other", "Top ten lists that don't fit other categories", "📋"),
]


def category_id_for(slug: str) -> UUID:
    """Stable id of a seeded category."""
    return uuid5(CATEGORY_NAMESPACE, slug)


def default_categories() -> list[Category]:
    """Seed categories as domain models."""
    return [
        Category(
            id=CategoryId(category_id_for(slug)),
            name=name,
            slug=slug,
            description=description,
            icon=icon,
        )
        for name, slug, description, icon in DEFAULT_CATEGORIES
    ]
