from enum import Enum


class Category(Enum):
    """Fixed set of music categories shown on the Categories screen."""
    FOCUS = "Focus"
    RELAX = "Relax"
    DEEP_SLEEP = "Deep Sleep"

    @property
    def label(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def from_value(cls, value: str) -> "Category":
        """Look up a category by display label or member name.

        Raises:
            ValueError: If no category matches.
        """
        for category in cls:
            if value in (category.value, category.name):
                return category
        raise ValueError(f"Unknown category: {value!r}")


_DESCRIPTIONS = {
    Category.FOCUS: "Enhance concentration and productivity",
    Category.RELAX: "Unwind and reduce stress",
    Category.DEEP_SLEEP: "Promote restful sleep",
}

_ICONS = {
    Category.FOCUS: "🧠",
    Category.RELAX: "🍃",
    Category.DEEP_SLEEP: "🌙",
}

_COLORS = {
    Category.FOCUS: "blue",
    Category.RELAX: "green",
    Category.DEEP_SLEEP: "purple",
}
