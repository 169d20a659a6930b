"""
Pytest configuration and shared fixtures for functional collections tests.
"""

from dataclasses import dataclass

import pytest

from functional_collections import ArrayMap, List, default_registry


@dataclass(eq=False)
class Person:
    """A plain object compared by identity unless a key function says otherwise."""

    name: str
    email: str = ""

    def __str__(self) -> str:
        return self.name


@pytest.fixture(autouse=True)
def fresh_identities():
    """Start every test with an empty default identity registry."""
    default_registry.reset()
    yield
    default_registry.reset()


@pytest.fixture
def sarah() -> Person:
    return Person("sarah", "s.connor@me.com")


@pytest.fixture
def people_by_email():
    """Factory fixture for keyed containers with one entry per e-mail address."""

    def _people(container_type, with_values: bool = True):
        people = [
            Person("sarah", "s.connor@me.com"),
            Person("pedro", "delpaso@titi.com"),
            Person("unknown", ""),
        ]
        if not with_values:
            return container_type.with_key(lambda person: person.email, *people)
        flat = []
        for value, person in enumerate(people, start=1):
            flat.extend([person, value])
        return container_type.with_key(lambda person: person.email, *flat)

    return _people


@pytest.fixture
def numbers() -> List:
    return List(1, 2, 3, 4, 5, 6)


@pytest.fixture
def number_map() -> ArrayMap:
    return ArrayMap(1, 10, 2, 20, 3, 30)
