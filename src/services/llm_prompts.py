"""LLM prompt templates for recipe generation."""

RECIPE_SYSTEM_PROMPT = (
    "You are KitchenWise, a recipe generator. Follow only the user's constraint and pantry list."
)


def get_recipe_prompt(constraint: str, ingredients: list[dict]) -> str:
    """Generate prompt for a recipe that uses only the given pantry items.

    Args:
        constraint: Dietary constraint, e.g. "Vegan" or "No Constraint"
        ingredients: List of dicts with name, quantity
    """
    pantry_list = "\n".join(f"• {ing['name']} ({ing['quantity']})" for ing in ingredients)
    return f"""Here are my pantry items:
{pantry_list}

Constraint: {constraint}

Using only these ingredients, generate a single popular (not too niche) recipe that fits the given constraint. Return your answer exactly in this format:

Title: <Recipe Name>

Description: <A brief paragraph (1-2 sentences) describing the dish, no step-by-step instructions>"""
