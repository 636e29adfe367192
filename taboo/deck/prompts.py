"""Prompt for generating a deck of Taboo cards."""

import json

SYSTEM_PROMPT = (
    "You write cards for the party game Taboo. "
    "You answer with JSON only, exactly in the requested shape."
)

# Word guidance by difficulty
DIFFICULTY_GUIDANCE = {
    "easy": "simple, common words that are well-known",
    "medium": "moderately challenging words with clear but not obvious connections",
    "hard": (
        "extremely challenging words with subtle connections and "
        "difficult-to-avoid taboo words. The words should be very niche "
        "and not obvious at all"
    ),
}

# Sample cards shown in the prompt, trimmed to the requested taboo count
_EXAMPLE_CARDS = (
    ("Ocean", ("Water", "Sea", "Blue", "Fish", "Waves")),
    ("Pizza", ("Cheese", "Italy", "Dough", "Slice", "Pepperoni")),
)


def _example_block(taboo_word_count: int) -> str:
    """Render the two example cards with up to five taboo words each."""
    shown = min(taboo_word_count, len(_EXAMPLE_CARDS[0][1]))
    cards = [
        {"word": word, "tabooWords": list(taboo[:shown])}
        for word, taboo in _EXAMPLE_CARDS
    ]
    return json.dumps(cards, indent=2)


def build_deck_prompt(
    category: str,
    difficulty: str,
    word_count: int,
    taboo_word_count: int,
) -> str:
    """Build prompt for deck generation.

    Args:
        category: Theme of the words (e.g. "movies")
        difficulty: easy, medium or hard
        word_count: Exact number of cards wanted
        taboo_word_count: Exact number of taboo words per card

    Returns:
        User prompt text
    """
    guidance = DIFFICULTY_GUIDANCE.get(difficulty, DIFFICULTY_GUIDANCE["medium"])

    if taboo_word_count == 0:
        taboo_instruction = (
            "Since there are 0 taboo words, just provide an empty array for tabooWords."
        )
    else:
        taboo_instruction = (
            "Make sure the taboo words are related to the main word but "
            "challenging to avoid. The words should be appropriate for the "
            f"{difficulty} difficulty level."
        )

    return f"""Generate {word_count} Taboo game cards for the category "{category}" with {difficulty} difficulty.

For {difficulty} difficulty, use {guidance}.

Return ONLY a valid JSON array with exactly {word_count} objects. Each object must have:
- "word": the main word to guess (string). It can be multiple words (e.g., "Ice Cream").
- "tabooWords": array of exactly {taboo_word_count} taboo words that cannot be used when describing the main word (array of strings)

{taboo_instruction}

Example format:
{_example_block(taboo_word_count)}

Return ONLY the JSON array, no other text or explanation."""
