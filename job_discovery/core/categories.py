"""Marketplace job categories and their filter values."""

AVAILABLE_CATEGORIES: tuple[str, ...] = (
    "Plumbing",
    "Electrical",
    "Carpentry",
    "Painting",
    "Landscaping",
    "Cleaning",
    "General Maintenance",
    "Roofing",
    "HVAC",
    "Drywall",
    "Flooring",
    "Windows",
    "Pest Control",
)

ALL_CATEGORIES_VALUE = "all"


def category_value(name: str) -> str:
    """Lowercase filter value for a category name ("Pest Control" -> "pest_control")."""
    return "_".join(name.lower().split())


def category_display_name(value: str) -> str:
    """Human-readable name for a filter value.

    Known catalog values map back to their catalog name; anything else is
    title-cased word by word.
    """
    if value == ALL_CATEGORIES_VALUE:
        return "All Categories"
    for name in AVAILABLE_CATEGORIES:
        if category_value(name) == value:
            return name
    return " ".join(word[:1].upper() + word[1:] for word in value.split("_") if word)
