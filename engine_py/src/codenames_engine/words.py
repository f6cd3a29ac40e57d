"""
Word pool utilities.
"""

import logging
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


DEFAULT_WORD_POOL: List[str] = [
    "ACID", "ACTOR", "AFRICA", "AGENT", "AIR", "ALIEN", "ALPS", "AMAZON", "AMBULANCE", "ANCHOR",
    "ANGEL", "ANT", "ANTARCTICA", "APPLE", "ARM", "ARROW", "ATLANTIS", "ATOM", "AUSTRALIA", "AZTEC",
    "BACK", "BAKER", "BALL", "BALLOON", "BAND", "BANK", "BAR", "BARK", "BAT", "BATTERY",
    "BEACH", "BEAM", "BEAN", "BEAR", "BEAT", "BED", "BEE", "BEIJING", "BELL", "BELT",
    "BENCH", "BERLIN", "BERMUDA", "BERRY", "BICYCLE", "BILL", "BIRD", "BLADE", "BLIND", "BLOCK",
    "BOARD", "BOAT", "BOLT", "BOMB", "BOND", "BONE", "BOOK", "BOOM", "BOOT", "BOTTLE",
    "BOW", "BOX", "BRAIN", "BRANCH", "BRICK", "BRIDGE", "BRUSH", "BUCK", "BUCKET", "BUFFALO",
    "BUG", "BUGLE", "BULB", "BUTTON", "CABIN", "CABLE", "CACTUS", "CAKE", "CALF", "CAMEL",
    "CAMERA", "CAMP", "CANADA", "CANDLE", "CANE", "CANNON", "CANYON", "CAP", "CAPITAL", "CAPTAIN",
    "CAR", "CARD", "CARPET", "CARROT", "CASINO", "CASTLE", "CAT", "CAVE", "CELL", "CENTAUR",
    "CENTER", "CHAIN", "CHAIR", "CHALK", "CHANGE", "CHARGE", "CHECK", "CHEESE", "CHEST", "CHICK",
    "CHIMNEY", "CHINA", "CHIP", "CHOCOLATE", "CHURCH", "CIRCLE", "CLIFF", "CLOAK", "CLOCK", "CLOUD",
    "CLUB", "COACH", "COAST", "CODE", "COFFEE", "COLD", "COLLAR", "COMET", "COMIC", "COMPASS",
    "COMPOUND", "CONCERT", "CONDUCTOR", "CONTRACT", "COOK", "COPPER", "CORAL", "CORN", "COTTON", "COURT",
    "COVER", "COW", "CRAB", "CRANE", "CRASH", "CRATER", "CRAYON", "CREAM", "CRICKET", "CROSS",
    "CROW", "CROWN", "CRYSTAL", "CUP", "CURRENT", "CURTAIN", "CYCLE", "DANCE", "DATE", "DAY",
    "DEATH", "DECK", "DEGREE", "DESERT", "DESK", "DIAMOND", "DICE", "DINOSAUR", "DISEASE", "DOCTOR",
    "DOG", "DOLPHIN", "DOOR", "DRAFT", "DRAGON", "DRAIN", "DRESS", "DRILL", "DRUM", "DUCK",
    "DUST", "DWARF", "EAGLE", "EARTH", "ECHO", "EGG", "EGYPT", "ELBOW", "EMBASSY", "ENGINE",
    "ENGLAND", "EUROPE", "EYE", "FACE", "FAIR", "FALL", "FAN", "FARM", "FEATHER", "FENCE",
    "FIELD", "FIGHTER", "FIGURE", "FILE", "FILM", "FIRE", "FISH", "FLAG", "FLOOD", "FLUTE",
    "FLY", "FOAM", "FOG", "FOOT", "FORCE", "FOREST", "FORK", "FOSSIL", "FOUNTAIN", "FOX",
    "FRAME", "FRANCE", "FROG", "FROST", "GAME", "GARDEN", "GAS", "GATE", "GENIUS", "GERMANY",
    "GHOST", "GIANT", "GLACIER", "GLASS", "GLOVE", "GOLD", "GRACE", "GRASS", "GREECE", "GREEN",
    "GROUND", "GUITAR", "HAM", "HAMMER", "HAND", "HARBOR", "HAWK", "HEAD", "HEART", "HELICOPTER",
    "HELMET", "HERO", "HIGHWAY", "HILL", "HOLE", "HONEY", "HOOD", "HOOK", "HORN", "HORSE",
    "HOSPITAL", "HOTEL", "ICE", "INDIA", "IRON", "ISLAND", "IVORY", "JACK", "JAM", "JET",
    "JEWEL", "JUNGLE", "JUPITER", "KANGAROO", "KETCHUP", "KEY", "KID", "KING", "KITCHEN", "KITE",
    "KNIFE", "KNIGHT", "KNOT", "LAB", "LADDER", "LAKE", "LAMP", "LANTERN", "LASER", "LAWYER",
    "LEAD", "LEAF", "LEMON", "LENS", "LETTER", "LIBRARY", "LIFE", "LIGHT", "LIMOUSINE", "LINE",
    "LINK", "LION", "LOCK", "LOG", "LONDON", "MACHINE", "MAGNET", "MAIL", "MAPLE", "MARBLE",
    "MARCH", "MARKET", "MASK", "MATCH", "MERCURY", "MEXICO", "MICROSCOPE", "MILL", "MINE", "MINT",
    "MIRROR", "MISSILE", "MODEL", "MOLE", "MOON", "MOSCOW", "MOUNT", "MOUSE", "MUD", "MUG",
    "NAIL", "NEEDLE", "NET", "NIGHT", "NINJA", "NOTE", "NOVEL", "NURSE", "NUT", "OASIS",
    "OCEAN", "OCTOPUS", "OIL", "OLIVE", "OLYMPUS", "OPERA", "ORANGE", "ORCHESTRA", "ORGAN", "OWL",
    "PALM", "PAN", "PANTS", "PAPER", "PARACHUTE", "PARADE", "PARIS", "PARK", "PASS", "PASTE",
    "PEARL", "PENGUIN", "PEPPER", "PHOENIX", "PIANO", "PIE", "PILOT", "PIN", "PIPE", "PIRATE",
    "PISTOL", "PIT", "PITCH", "PLANE", "PLANET", "PLATE", "PLAY", "PLOT", "POCKET", "POINT",
    "POISON", "POLE", "POOL", "PORT", "POST", "POTATO", "POUND", "PRESS", "PRINCESS", "PUMPKIN",
    "PUPIL", "PYRAMID", "QUEEN", "RABBIT", "RACKET", "RADIO", "RAIL", "RAINBOW", "RAY", "REVOLUTION",
    "RIDER", "RING", "RIVER", "ROBIN", "ROBOT", "ROCK", "ROCKET", "ROME", "ROOT", "ROPE",
    "ROSE", "ROULETTE", "ROUND", "ROW", "RULER", "SADDLE", "SAIL", "SALT", "SATELLITE", "SATURN",
    "SCALE", "SCHOOL", "SCIENTIST", "SCORPION", "SCREEN", "SCRIPT", "SCUBA", "SEAL", "SERVER", "SHADOW",
    "SHARK", "SHELL", "SHIP", "SHOE", "SHOP", "SHOT", "SIGNAL", "SILK", "SINK", "SKATE",
    "SKYSCRAPER", "SLED", "SLIP", "SLUG", "SMUGGLER", "SNAKE", "SNOW", "SNOWMAN", "SOCK", "SOLDIER",
    "SOUL", "SOUND", "SPACE", "SPELL", "SPIDER", "SPIKE", "SPINE", "SPOON", "SPOT", "SPRING",
    "SPY", "SQUARE", "STADIUM", "STAFF", "STAR", "STATE", "STEAM", "STICK", "STOCK", "STORM",
    "STRAW", "STREAM", "STRIKE", "STRING", "SUB", "SUGAR", "SUIT", "SUPERHERO", "SWAMP", "SWING",
    "SWITCH", "SWORD", "TABLE", "TABLET", "TAG", "TAIL", "TANK", "TAP", "TEA", "TICKET",
    "TELESCOPE", "TEMPLE", "TENT", "THIEF", "THREAD", "THRONE", "THUMB", "TICK", "TIE", "TIGER",
    "TIME", "TOAST", "TOKYO", "TOOTH", "TORCH", "TOWER", "TRACK", "TRAIN", "TRIANGLE", "TRIP",
    "TRUCK", "TRUNK", "TUBE", "TURKEY", "TURTLE", "UNDERTAKER", "UNICORN", "UNIVERSITY", "VACUUM", "VALLEY",
    "VAN", "VASE", "VET", "VIOLIN", "VIRUS", "VOLCANO", "WAGON", "WAKE", "WALL", "WAR",
    "WASHER", "WATCH", "WATER", "WAVE", "WEB", "WELL", "WHALE", "WHEEL", "WHIP", "WIND",
    "WINDOW", "WING", "WIRE", "WITCH", "WIZARD", "WOLF", "WOOL", "WORM", "YARD", "ZEBRA",
]


def normalize_words(words: Iterable[str]) -> List[str]:
    """
    Upper-case, strip and de-duplicate a word list, keeping first occurrences.

    Args:
        words: Raw words

    Returns:
        Normalized list with blanks removed
    """
    seen = set()
    result = []
    for word in words:
        word = word.strip().upper()
        if word and word not in seen:
            seen.add(word)
            result.append(word)
    return result


def load_word_pool(filepath: str) -> List[str]:
    """
    Load a word pool from a file with one word per line.

    Args:
        filepath: Path to the word list

    Returns:
        Normalized list of words

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Word list file not found: {filepath}")

    with open(path, 'r', encoding='utf-8') as f:
        words = normalize_words(f)

    logger.info(f"Loaded {len(words)} words from {filepath}")
    return words
