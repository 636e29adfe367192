"""
Built-in word bank for offline play.

MockDeckProvider stands in for the language model when the mock-data
toggle is on (`taboo play --mock`, TABOO_USE_MOCK=1 or the persisted
preference). Decks are drawn from a fixed bank per difficulty, so the
category is ignored. Seeding makes the draw repeatable.

Cards are drawn from a shuffled bag; a deck larger than the bank
reshuffles and draws again, so words can repeat in long decks. Cards
that carry fewer taboo words than requested are padded with taboo words
borrowed from other cards in the bank.
"""

import random
from typing import Dict, List, Optional, Tuple

from taboo.core.logging import get_logger
from taboo.game.models import Card, Deck, Difficulty

logger = get_logger(__name__)

BankEntry = Tuple[str, Tuple[str, ...]]

WORD_BANK: Dict[str, List[BankEntry]] = {
    "easy": [
        ("Ocean", ("Water", "Sea", "Blue", "Fish", "Waves", "Beach")),
        ("Pizza", ("Cheese", "Italy", "Dough", "Slice", "Pepperoni", "Oven")),
        ("Dog", ("Bark", "Pet", "Puppy", "Leash", "Bone", "Tail")),
        ("Sun", ("Hot", "Sky", "Light", "Star", "Day", "Yellow")),
        ("Book", ("Read", "Pages", "Library", "Author", "Story", "Cover")),
        ("Apple", ("Fruit", "Red", "Tree", "Pie", "Green", "Core")),
        ("Car", ("Drive", "Wheels", "Road", "Engine", "Garage", "Vehicle")),
        ("Birthday", ("Cake", "Candles", "Party", "Age", "Presents", "Celebrate")),
        ("Rain", ("Water", "Umbrella", "Clouds", "Wet", "Storm", "Drops")),
        ("School", ("Teacher", "Class", "Students", "Learn", "Desk", "Homework")),
        ("Ice Cream", ("Cold", "Cone", "Scoop", "Dessert", "Vanilla", "Freeze")),
        ("Guitar", ("Strings", "Music", "Play", "Rock", "Chords", "Band")),
        ("Snow", ("Cold", "White", "Winter", "Flakes", "Snowman", "Ski")),
        ("Phone", ("Call", "Mobile", "Ring", "Text", "Screen", "Smart")),
        ("Beach", ("Sand", "Ocean", "Sun", "Towel", "Swim", "Shore")),
        ("Chair", ("Sit", "Seat", "Legs", "Table", "Furniture", "Back")),
        ("Train", ("Rails", "Station", "Tracks", "Ticket", "Engine", "Carriage")),
        ("Banana", ("Yellow", "Fruit", "Peel", "Monkey", "Split", "Bunch")),
        ("Clock", ("Time", "Hands", "Tick", "Alarm", "Hour", "Wall")),
        ("Football", ("Ball", "Kick", "Goal", "Team", "Soccer", "Field")),
    ],
    "medium": [
        ("Passport", ("Travel", "Country", "Border", "Stamp", "Visa", "Photo")),
        ("Volcano", ("Lava", "Erupt", "Mountain", "Ash", "Magma", "Crater")),
        ("Orchestra", ("Music", "Conductor", "Violin", "Symphony", "Musicians", "Concert")),
        ("Marathon", ("Run", "Race", "Miles", "Finish", "Runners", "Long")),
        ("Lighthouse", ("Light", "Ship", "Coast", "Beacon", "Tower", "Rocks")),
        ("Vaccine", ("Shot", "Needle", "Doctor", "Immune", "Disease", "Flu")),
        ("Submarine", ("Underwater", "Navy", "Periscope", "Ocean", "Dive", "Torpedo")),
        ("Election", ("Vote", "Candidate", "Ballot", "President", "Campaign", "Poll")),
        ("Telescope", ("Stars", "Lens", "Space", "Astronomy", "Look", "Planets")),
        ("Compost", ("Garden", "Soil", "Waste", "Rot", "Worms", "Organic")),
        ("Origami", ("Paper", "Fold", "Japan", "Crane", "Art", "Shape")),
        ("Mortgage", ("House", "Loan", "Bank", "Payment", "Interest", "Home")),
        ("Avalanche", ("Snow", "Mountain", "Slide", "Ski", "Danger", "Rescue")),
        ("Podcast", ("Listen", "Episode", "Audio", "Host", "Show", "Radio")),
        ("Glacier", ("Ice", "Melt", "Cold", "Mountain", "Frozen", "Slow")),
        ("Referee", ("Whistle", "Game", "Rules", "Foul", "Judge", "Match")),
        ("Tuxedo", ("Suit", "Formal", "Black", "Wedding", "Bow Tie", "Jacket")),
        ("Recipe", ("Cook", "Ingredients", "Kitchen", "Food", "Instructions", "Dish")),
        ("Hammock", ("Swing", "Relax", "Trees", "Hang", "Nap", "Rope")),
        ("Eclipse", ("Moon", "Sun", "Dark", "Shadow", "Solar", "Block")),
    ],
    "hard": [
        ("Serendipity", ("Luck", "Chance", "Accident", "Fortunate", "Discovery", "Happy")),
        ("Ephemeral", ("Short", "Brief", "Temporary", "Fleeting", "Moment", "Lasting")),
        ("Palimpsest", ("Manuscript", "Erase", "Write", "Parchment", "Layers", "Reuse")),
        ("Sonder", ("Realize", "Strangers", "Lives", "Complex", "People", "Own")),
        ("Mitochondria", ("Cell", "Energy", "Powerhouse", "Biology", "ATP", "Organelle")),
        ("Filibuster", ("Senate", "Speech", "Delay", "Vote", "Talk", "Congress")),
        ("Schadenfreude", ("Pleasure", "Misfortune", "German", "Others", "Joy", "Pain")),
        ("Tessellation", ("Pattern", "Tiles", "Shapes", "Repeat", "Geometry", "Gaps")),
        ("Occam's Razor", ("Simple", "Explanation", "Principle", "Philosophy", "Assumptions", "Shave")),
        ("Petrichor", ("Rain", "Smell", "Earth", "Dry", "Scent", "Soil")),
        ("Doppelganger", ("Double", "Twin", "Lookalike", "Copy", "Same", "Identical")),
        ("Apogee", ("Orbit", "Farthest", "Peak", "Moon", "Earth", "Point")),
        ("Quorum", ("Minimum", "Members", "Meeting", "Vote", "Number", "Present")),
        ("Zeitgeist", ("Spirit", "Time", "Era", "German", "Culture", "Mood")),
        ("Isthmus", ("Land", "Narrow", "Connect", "Water", "Panama", "Strip")),
        ("Sisyphean", ("Endless", "Boulder", "Hill", "Myth", "Task", "Futile")),
        ("Oxymoron", ("Contradiction", "Words", "Opposite", "Figure", "Speech", "Phrase")),
        ("Halcyon", ("Calm", "Peaceful", "Days", "Golden", "Past", "Idyllic")),
        ("Entropy", ("Disorder", "Energy", "Thermodynamics", "Chaos", "Physics", "Increase")),
        ("Pyrrhic", ("Victory", "Cost", "Win", "Loss", "Battle", "Ancient")),
    ],
}


class MockDeckProvider:
    """
    Deck provider backed by the built-in word bank.

    Attributes:
        seed: Seed for the shuffle (None = different deck every time)
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def fetch_deck(self, request) -> Deck:
        """Draw a deck matching the request's counts.

        Args:
            request: DeckRequest (category is ignored)

        Returns:
            Deck with exactly request.word_count cards
        """
        difficulty = Difficulty(request.difficulty).value
        bank = WORD_BANK[difficulty]
        companions = self._companions(bank)

        cards: List[Card] = []
        bag: List[BankEntry] = []
        while len(cards) < request.word_count:
            if not bag:
                bag = list(bank)
                self._rng.shuffle(bag)
            word, taboo = bag.pop()
            cards.append(
                Card(
                    word=word,
                    taboo_words=self._taboo_words(
                        word, taboo, request.taboo_word_count, companions
                    ),
                )
            )

        logger.info(
            "Built mock deck",
            difficulty=difficulty,
            cards=len(cards),
            category_ignored=request.category,
        )
        return Deck(cards)

    @staticmethod
    def _companions(bank: List[BankEntry]) -> List[str]:
        """All taboo words in the bank, first occurrence order."""
        seen: Dict[str, None] = {}
        for _, taboo in bank:
            for w in taboo:
                seen.setdefault(w, None)
        return list(seen)

    def _taboo_words(
        self,
        word: str,
        taboo: Tuple[str, ...],
        count: int,
        companions: List[str],
    ) -> Tuple[str, ...]:
        """Exactly `count` taboo words, padded from companions when short."""
        chosen = list(taboo[:count])
        if len(chosen) < count:
            extra = [w for w in companions if w not in chosen and w != word]
            self._rng.shuffle(extra)
            chosen.extend(extra[: count - len(chosen)])
        return tuple(chosen)
