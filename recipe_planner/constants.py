"""Fixed vocabularies shared by preferences and curated recipes.

Values match the Spoonacular search parameters so they can be passed through
unchanged.
"""

CUISINES = (
    "African",
    "Asian",
    "American",
    "British",
    "Cajun",
    "Caribbean",
    "Chinese",
    "Eastern European",
    "European",
    "French",
    "German",
    "Greek",
    "Indian",
    "Irish",
    "Italian",
    "Japanese",
    "Jewish",
    "Korean",
    "Latin American",
    "Mediterranean",
    "Mexican",
    "Middle Eastern",
    "Nordic",
    "Southern",
    "Spanish",
    "Thai",
    "Vietnamese",
)

DIETS = (
    "Gluten Free",
    "Ketogenic",
    "Vegetarian",
    "Lacto-Vegetarian",
    "Ovo-Vegetarian",
    "Vegan",
    "Pescetarian",
    "Paleo",
    "Primal",
    "Low FODMAP",
    "Whole30",
)

INTOLERANCES = (
    "Dairy",
    "Egg",
    "Gluten",
    "Grain",
    "Peanut",
    "Seafood",
    "Sesame",
    "Shellfish",
    "Soy",
    "Sulfite",
    "Tree Nut",
    "Wheat",
)

# Wire name -> (column attribute, allowed values)
PREFERENCE_FIELDS = {
    "cuisineLike": ("cuisine_like", CUISINES),
    "cuisineDislike": ("cuisine_dislike", CUISINES),
    "diet": ("diet", DIETS),
    "intolerances": ("intolerances", INTOLERANCES),
}

TOP_FAVORITES_LIMIT = 10
TOP_PREFERENCES_LIMIT = 3
