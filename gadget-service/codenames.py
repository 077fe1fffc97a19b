# codenames.py
import random
import string
from typing import List, Optional, Sequence

ADJECTIVES = [
    "Agile", "Amber", "Brave", "Bright", "Calm", "Clever", "Cosmic", "Crimson",
    "Daring", "Electric", "Elegant", "Fearless", "Fierce", "Gentle", "Gleaming",
    "Grand", "Hidden", "Hollow", "Icy", "Jolly", "Keen", "Lucky", "Mighty",
    "Misty", "Nimble", "Noble", "Quiet", "Rapid", "Restless", "Rustic", "Silent",
    "Sly", "Swift", "Tactical", "Twisted", "Valiant", "Vivid", "Wild", "Wise", "Zealous",
]

COLORS = [
    "Amethyst", "Aqua", "Azure", "Black", "Blue", "Bronze", "Copper", "Coral",
    "Crimson", "Cyan", "Emerald", "Gold", "Gray", "Green", "Indigo", "Ivory",
    "Jade", "Lavender", "Magenta", "Maroon", "Olive", "Orange", "Pink", "Purple",
    "Red", "Scarlet", "Silver", "Teal", "Violet", "White",
]

ANIMALS = [
    "Albatross", "Badger", "Bat", "Bear", "Bison", "Cobra", "Condor", "Coyote",
    "Crane", "Crow", "Dolphin", "Eagle", "Falcon", "Ferret", "Fox", "Gecko",
    "Hawk", "Heron", "Hornet", "Ibis", "Jackal", "Jaguar", "Lynx", "Mamba",
    "Mongoose", "Moth", "Octopus", "Orca", "Otter", "Owl", "Panther", "Puma",
    "Raven", "Scorpion", "Shark", "Sparrow", "Stingray", "Tiger", "Viper", "Wolf",
]

THEMES = {
    "spy": [
        ["Stealth", "Shadow", "Phantom", "Ghost", "Viper", "Falcon", "Eagle", "Raven", "Wolf", "Panther"],
        ["Strike", "Blade", "Fury", "Storm", "Lightning", "Thunder", "Fire", "Ice", "Steel", "Diamond"],
        ["Protocol", "Directive", "Operation", "Mission", "Code", "Cipher", "Signal", "Vector", "Matrix", "Nexus"],
    ],
    "mythological": [
        ["Titan", "Phoenix", "Dragon", "Kraken", "Hydra", "Griffin", "Chimera", "Cerberus", "Pegasus", "Sphinx"],
        ["Prime", "Elite", "Supreme", "Ultra", "Mega", "Hyper", "Alpha", "Beta", "Gamma", "Delta"],
        ["Guardian", "Sentinel", "Defender", "Protector", "Warden", "Shield", "Armor", "Fortress", "Bastion", "Citadel"],
    ],
    "tech": [
        ["Quantum", "Neural", "Digital", "Cyber", "Nano", "Plasma", "Photon", "Electron", "Proton", "Neutron"],
        ["Core", "Matrix", "Array", "Grid", "Network", "System", "Engine", "Drive", "Processor", "Circuit"],
        ["Interface", "Protocol", "Algorithm", "Database", "Framework", "Platform", "Module", "Component", "Device", "Tool"],
    ],
}

DESCRIPTION_TEMPLATES = [
    "{codename} is a state-of-the-art surveillance device with quantum encryption capabilities.",
    "{codename} features advanced stealth technology and multi-spectrum camouflage systems.",
    "{codename} is equipped with neural interface technology for seamless agent integration.",
    "{codename} incorporates cutting-edge biometric authentication and self-defense mechanisms.",
    "{codename} utilizes nano-scale components for maximum portability and effectiveness.",
    "{codename} combines artificial intelligence with traditional espionage tools for optimal mission success.",
    "{codename} features electromagnetic pulse resistance and tactical communication arrays.",
    "{codename} is designed for extreme environments with adaptive camouflage capabilities.",
    "{codename} includes holographic projection technology and voice modulation systems.",
    "{codename} integrates satellite uplink capabilities with real-time data analysis tools.",
]

MIN_SUCCESS_PROBABILITY = 45
MAX_SUCCESS_PROBABILITY = 98

SELF_DESTRUCT_ALPHABET = string.ascii_uppercase + string.digits
SELF_DESTRUCT_CODE_LENGTH = 8

SELF_DESTRUCT_ELIGIBLE = ("Available", "Deployed")


def can_self_destruct(status) -> bool:
    """
    Only available and deployed gadgets can be self-destructed.
    """
    return status in SELF_DESTRUCT_ELIGIBLE


class CodenameGenerator:
    """
    Produces codenames, filler descriptions, success probabilities and
    self-destruct codes from an injectable random source.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.SystemRandom()

    def generate_codename(self) -> str:
        words = [self.rng.choice(ADJECTIVES), self.rng.choice(COLORS), self.rng.choice(ANIMALS)]
        return "The " + " ".join(words)

    def generate_alternative_codename(self) -> str:
        theme: List[Sequence[str]] = THEMES[self.rng.choice(sorted(THEMES))]
        # Only the first two word lists of a theme make up a name.
        return f"The {self.rng.choice(theme[0])} {self.rng.choice(theme[1])}"

    def generate_mission_success_probability(self) -> int:
        return self.rng.randint(MIN_SUCCESS_PROBABILITY, MAX_SUCCESS_PROBABILITY)

    def generate_self_destruct_code(self) -> str:
        code = "".join(self.rng.choice(SELF_DESTRUCT_ALPHABET) for _ in range(SELF_DESTRUCT_CODE_LENGTH))
        # XXXX-XXXX
        return f"{code[:4]}-{code[4:]}"

    def generate_description(self, codename: str) -> str:
        return self.rng.choice(DESCRIPTION_TEMPLATES).format(codename=codename)

    can_self_destruct = staticmethod(can_self_destruct)


default_generator = CodenameGenerator()
