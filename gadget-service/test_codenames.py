import random
import re

import pytest

from codenames import (
    ADJECTIVES,
    ANIMALS,
    COLORS,
    DESCRIPTION_TEMPLATES,
    THEMES,
    CodenameGenerator,
    can_self_destruct,
)


@pytest.fixture
def seeded():
    return CodenameGenerator(random.Random(42))


def test_codename_uses_adjective_color_animal(seeded):
    for _ in range(50):
        prefix, adjective, color, animal = seeded.generate_codename().split(" ")
        assert prefix == "The"
        assert adjective in ADJECTIVES
        assert color in COLORS
        assert animal in ANIMALS


def test_alternative_codename_stays_within_one_theme(seeded):
    for _ in range(50):
        prefix, first, second = seeded.generate_alternative_codename().split(" ")
        assert prefix == "The"
        assert any(first in lists[0] and second in lists[1] for lists in THEMES.values())


def test_alternative_codename_never_uses_third_list(seeded):
    third_words = {word for lists in THEMES.values() for word in lists[2]} - {
        word for lists in THEMES.values() for word in lists[0] + lists[1]
    }
    for _ in range(300):
        _, first, second = seeded.generate_alternative_codename().split(" ")
        assert first not in third_words
        assert second not in third_words


def test_same_seed_gives_same_codenames():
    a = CodenameGenerator(random.Random(7))
    b = CodenameGenerator(random.Random(7))
    assert [a.generate_codename() for _ in range(5)] == [b.generate_codename() for _ in range(5)]


def test_mission_success_probability_range(seeded):
    samples = [seeded.generate_mission_success_probability() for _ in range(2000)]
    assert all(isinstance(p, int) and 45 <= p <= 98 for p in samples)
    assert min(samples) == 45
    assert max(samples) == 98


def test_self_destruct_code_format(seeded):
    for _ in range(100):
        assert re.match(r"^[A-Z0-9]{4}-[A-Z0-9]{4}$", seeded.generate_self_destruct_code())


def test_default_generator_uses_system_random():
    assert isinstance(CodenameGenerator().rng, random.SystemRandom)


@pytest.mark.parametrize(
    "status,expected",
    [
        ("Available", True),
        ("Deployed", True),
        ("Destroyed", False),
        ("Decommissioned", False),
        ("available", False),
        ("Obsolete", False),
        (None, False),
    ],
)
def test_can_self_destruct(status, expected):
    assert can_self_destruct(status) is expected
    assert CodenameGenerator.can_self_destruct(status) is expected


def test_description_interpolates_codename(seeded):
    description = seeded.generate_description("The Silent Teal Owl")
    assert description.startswith("The Silent Teal Owl ")
    assert description in [t.format(codename="The Silent Teal Owl") for t in DESCRIPTION_TEMPLATES]
    assert len(DESCRIPTION_TEMPLATES) == 10
