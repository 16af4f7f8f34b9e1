from __future__ import annotations

"""Descriptive sentence generator for country cards.

The deterministic clauses come from the country's own data; the trailing
statement is drawn from FACTS by an injectable selector (``random.choice`` by
default), so two calls for the same country may differ only in that tail.
"""
import random
from typing import Callable, Sequence

from wealth_ranker.models.country import Country

FACTS: tuple[str, ...] = (
    "is home to unique cultural traditions and has a rich history spanning thousands of years.",
    "has diverse landscapes ranging from mountains to coastlines, offering breathtaking natural beauty.",
    "boasts a unique cuisine that has influenced food culture around the world.",
    "has made significant contributions to art, literature, and human civilization.",
    "features stunning architecture that blends ancient traditions with modern innovation.",
    "is known for its technological advancements and innovative spirit.",
    "has a vibrant cultural scene with festivals celebrated throughout the year.",
    "possesses natural wonders and unique ecosystems found nowhere else on Earth.",
    "has a rich musical heritage that has influenced global music trends.",
    "is renowned for its fashion, design, and creative industries.",
    "has produced Nobel laureates and pioneers in various fields of science and arts.",
    "offers a unique blend of historical landmarks and modern urban development.",
)

Selector = Callable[[Sequence[str]], str]


def format_population(population: int) -> str:
    if population >= 1_000_000_000:
        return f"{population / 1_000_000_000:.1f} billion"
    if population >= 1_000_000:
        return f"{population / 1_000_000:.1f} million"
    return f"{population:,}"


def describe(country: Country, choose: Selector = random.choice) -> str:
    clauses = []

    if country.population:
        clauses.append(f"has a population of {format_population(country.population)} people")

    if country.capital and country.capital != "N/A":
        clauses.append(f"with {country.capital} as its capital city")

    if country.region:
        clauses.append(f"located in {country.region}")

    if country.languages:
        spoken = ", ".join(country.languages[:3])
        more = " and more" if len(country.languages) > 3 else ""
        clauses.append(f"where people speak {spoken}{more}")

    name = country.name or "This country"
    return f"{name} {', '.join(clauses)}, and {choose(FACTS)}"
