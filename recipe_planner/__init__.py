"""Recipe Planner: recipes, preferences, pantry and grocery cart API."""

__version__ = "1.0.0"
