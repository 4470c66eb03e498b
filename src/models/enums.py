"""Enums for stored record fields."""

from enum import Enum


class PantryItemType(str, Enum):
    """Food category of a pantry item."""

    DAIRY = "Dairy"
    PRODUCE = "Produce"
    MEAT = "Meat"
    GRAINS = "Grains"
    SNACKS = "Snacks"
    BEVERAGES = "Beverages"
    CONDIMENTS = "Condiments"
    FROZEN = "Frozen"
    OTHER = "Other"


class PantryLocation(str, Enum):
    """Where in the kitchen a pantry item is kept."""

    FRIDGE = "Fridge"
    FREEZER = "Freezer"
    PANTRY = "Pantry"
    COUNTER = "Counter"
    OTHER = "Other"


class RecipeStatus(str, Enum):
    """Lifecycle state of a generated recipe."""

    TEMPORARY = "temporary"
    PERMANENT = "permanent"


class RecipeConstraint(str, Enum):
    """Dietary constraint a recipe is generated for."""

    NO_CONSTRAINT = "No Constraint"
    VEGETARIAN = "Vegetarian"
    VEGAN = "Vegan"
    GLUTEN_FREE = "Gluten-Free"
    DAIRY_FREE = "Dairy-Free"
    NUT_FREE = "Nut-Free"
    HIGH_PROTEIN = "High Protein"
    LOW_CARB = "Low Carb"
