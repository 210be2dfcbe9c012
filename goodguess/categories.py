"""
Category registry and target word lists.
Each category maps to an ordered list of candidate target words. Only some
categories also have a semantic table (see semantic_data.py); the rest are
scored lexically.
"""

import random
import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from .errors import UnknownCategoryError

logger = logging.getLogger(__name__)


class Category(NamedTuple):
    id: str
    display_name: str
    emoji: str


CATEGORIES: Tuple[Category, ...] = (
    Category("animals", "Animals", "\U0001F43C"),
    Category("food", "Food", "\U0001F355"),
    Category("countries", "Countries", "\U0001F30E"),
    Category("sports", "Sports", "⚽"),
    Category("movies", "Movies", "\U0001F3AC"),
    Category("celebrities", "Celebrities", "\U0001F31F"),
    Category("technology", "Technology", "\U0001F4BB"),
    Category("italianbrainrot", "Italian Brainrot", "\U0001F1EE\U0001F1F9"),
    Category("nature", "Nature", "\U0001F33F"),
    Category("vehicles", "Vehicles", "\U0001F697"),
    Category("professions", "Professions", "\U0001F468‍⚕️"),
    Category("fruits", "Fruits", "\U0001F34E"),
)

CATEGORY_WORDS: Dict[str, Tuple[str, ...]] = {
    "food": (
        "pizza", "burger", "pasta", "sushi", "taco", "sandwich", "chocolate", "cookie", "salad",
        "steak", "pancake", "waffle", "donut", "icecream", "cupcake", "croissant", "curry",
        "ramen", "lasagna", "yogurt", "muffin", "bagel", "cheesecake", "burrito", "fries",
        "soup", "omelette", "kebab", "gyros", "risotto", "nachos", "pretzel", "hummus",
    ),
    "animals": (
        "elephant", "tiger", "lion", "zebra", "giraffe", "monkey", "dolphin", "penguin", "koala",
        "kangaroo", "cheetah", "rhinoceros", "hippopotamus", "crocodile", "panda", "wolf", "bear",
        "fox", "squirrel", "rabbit", "deer", "owl", "eagle", "shark", "turtle", "frog", "snake",
        "octopus", "flamingo", "gorilla", "leopard", "whale", "camel", "gazelle",
    ),
    "countries": (
        "france", "japan", "brazil", "australia", "canada", "mexico", "germany", "italy", "spain",
        "china", "india", "egypt", "kenya", "argentina", "thailand", "russia", "sweden", "greece",
        "portugal", "turkey", "morocco", "vietnam", "chile", "peru", "ireland", "norway", "finland",
        "iceland", "denmark", "netherlands", "switzerland", "belgium",
    ),
    "sports": (
        "soccer", "basketball", "tennis", "baseball", "golf", "hockey", "volleyball", "swimming",
        "cycling", "rugby", "skiing", "gymnastics", "boxing", "surfing", "running", "cricket",
        "badminton", "archery", "fencing", "karate", "wrestling", "weightlifting", "rowing",
        "diving", "skating", "snowboarding", "climbing", "judo", "sailing", "skateboarding",
    ),
    "movies": (
        "avatar", "titanic", "avengers", "matrix", "inception", "frozen", "joker", "gladiator",
        "jurassic", "batman", "superman", "wonderwoman", "starwars", "harrypotter", "godfather",
        "jaws", "parasite", "shrek", "twilight", "alien", "terminator", "interstellar",
        "spiderman", "up", "zootopia", "cars", "departed", "notebook", "casablanca",
    ),
    "celebrities": (
        "beyonce", "ronaldo", "swift", "einstein", "adele", "madonna", "lebron", "elvis", "obama",
        "oprah", "messi", "jolie", "dicaprio", "jackson", "gaga", "pitt", "rihanna",
        "drake", "kardashian", "bieber", "depp", "lawrence", "streep", "hanks", "aniston", "lopez",
        "washington", "williams", "spielberg",
    ),
    "technology": (
        "computer", "smartphone", "internet", "robot", "software", "laptop", "bluetooth", "wifi",
        "artificial", "virtual", "cloud", "digital", "processor", "algorithm", "blockchain",
        "drone", "server", "database", "encryption", "firewall", "desktop", "router", "browser",
        "keyboard", "monitor", "binary", "quantum", "cybersecurity", "automation",
    ),
    "italianbrainrot": (
        "pizza", "pasta", "risotto", "gelato", "espresso", "cappuccino", "tiramisu", "cannoli",
        "lasagna", "gnocchi", "prosciutto", "mozzarella", "parmesan", "ferrari", "vespa",
        "rome", "venice", "tuscany", "sicily", "napoli", "milan", "florence", "amalfi",
        "colosseum", "gondola", "vatican", "pisa", "mafia", "soprano", "godfather",
    ),
    "nature": (
        "mountain", "ocean", "forest", "desert", "waterfall", "river", "volcano", "glacier",
        "canyon", "island", "jungle", "beach", "valley", "plateau", "tundra", "lake", "swamp",
        "meadow", "cliff", "reef", "cave", "geyser", "savanna", "delta", "fjord", "marsh", "creek",
        "rainforest", "lagoon", "badlands", "dunes",
    ),
    "vehicles": (
        "car", "airplane", "motorcycle", "bicycle", "helicopter", "submarine", "train", "truck",
        "boat", "scooter", "jetski", "spaceship", "van", "tractor", "yacht", "limousine", "taxi",
        "ambulance", "firetruck", "bus", "trolley", "ferry", "hovercraft", "sailboat", "tanker",
        "snowmobile", "forklift", "bulldozer", "segway",
    ),
    "professions": (
        "doctor", "teacher", "engineer", "lawyer", "pilot", "chef", "scientist", "artist", "police",
        "firefighter", "journalist", "architect", "accountant", "nurse", "programmer", "dentist",
        "electrician", "plumber", "veterinarian", "farmer", "photographer", "designer", "mechanic",
        "writer", "psychologist", "translator", "astronaut", "philosopher", "surgeon",
    ),
    "fruits": (
        "apple", "banana", "orange", "grape", "strawberry", "watermelon", "pineapple", "mango",
        "kiwi", "peach", "pear", "lemon", "cherry", "blueberry", "raspberry", "blackberry",
        "coconut", "avocado", "papaya", "guava", "pomegranate", "fig", "dragonfruit", "apricot",
        "passionfruit", "grapefruit", "plum", "persimmon", "lime", "tangerine",
    ),
}

ALL_GAME_WORDS = frozenset(word for words in CATEGORY_WORDS.values() for word in words)

_CATEGORY_BY_ID = {category.id: category for category in CATEGORIES}


def get_categories() -> List[Category]:
    """Return all categories in display order."""
    return list(CATEGORIES)


def get_category(category_id: str) -> Category:
    """Look up a category by id, raising UnknownCategoryError if it is not registered."""
    category = _CATEGORY_BY_ID.get(str(category_id).strip().lower())
    if category is None:
        raise UnknownCategoryError(f"Unknown category: {category_id}")
    return category


def get_word_list(category_id: str) -> List[str]:
    """Return the candidate target words for a category (empty for unknown ids)."""
    return list(CATEGORY_WORDS.get(str(category_id).strip().lower(), ()))


def pick_target_word(category_id: str, exclude=(), rng: Optional[random.Random] = None) -> str:
    """
    Pick a random target word for a category.

    Words in `exclude` are avoided when possible. If every word is excluded,
    the choice is widened to the whole list.
    """
    rng = rng or random
    words = get_word_list(category_id)
    if not words:
        raise UnknownCategoryError(f"No words available for category: {category_id}")
    excluded = set(exclude)
    candidates = [w for w in words if w not in excluded]
    if not candidates:
        logger.debug(f"All {len(words)} words excluded for '{category_id}'; allowing repeats")
        candidates = words
    return rng.choice(candidates)
