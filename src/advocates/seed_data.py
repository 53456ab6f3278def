"""Sample advocates and the vocabularies used by the filter controls.

``SAMPLE_ADVOCATES`` is the fixed dataset inserted by every seed run;
``create_random_records`` pads it with generated profiles.
"""
from __future__ import annotations

import random

from advocates.models import NewAdvocate

SPECIALTIES: tuple[str, ...] = (
    "Bipolar",
    "LGBTQ",
    "Medication/Prescribing",
    "Suicide History/Attempts",
    "General Mental Health (anxiety, depression, stress, grief, life transitions)",
    "Men's issues",
    "Relationship Issues (family, friends, couple, etc)",
    "Trauma & PTSD",
    "Personality disorders",
    "Personal growth",
    "Substance use/abuse",
    "Pediatrics",
    "Women's issues (post-partum, infertility, family planning)",
    "Chronic pain",
    "Weight loss & nutrition",
    "Eating disorders",
    "Diabetic Diet and nutrition",
    "Coaching (leadership, career, academic and wellness)",
    "Life coaching",
    "Obsessive-compulsive disorders",
    "Neuropsychological evaluations & testing (ADHD testing)",
    "Attention and Hyperactivity (ADHD)",
    "Sleep issues",
    "Schizophrenia and psychotic disorders",
    "Learning disorders",
    "Domestic abuse",
)

DEGREES: tuple[str, ...] = ("MD", "PhD", "MSW")

FIRST_NAMES: tuple[str, ...] = (
    "John", "Jane", "Alice", "Michael", "Emily", "Chris", "Jessica", "David",
    "Laura", "Daniel", "Sarah", "James", "Megan", "Joshua", "Amanda", "Priya",
    "Carlos", "Aisha", "Wei", "Olivia", "Noah", "Fatima", "Liam", "Sofia",
)

LAST_NAMES: tuple[str, ...] = (
    "Doe", "Smith", "Johnson", "Brown", "Davis", "Martinez", "Taylor",
    "Harris", "Clark", "Lewis", "Lee", "King", "Green", "Walker", "Hall",
    "Patel", "Nguyen", "Garcia", "Kim", "Okafor", "Rossi", "Cohen",
)

CITIES: tuple[str, ...] = (
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose",
    "Austin", "Jacksonville", "San Francisco", "Columbus", "Fort Worth",
    "Seattle", "Denver", "Boston", "Portland", "Atlanta",
)


def _sample(first: str, last: str, city: str, degree: str, spec: slice, years: int, phone: int) -> NewAdvocate:
    return NewAdvocate(
        first_name=first,
        last_name=last,
        city=city,
        degree=degree,
        specialties=SPECIALTIES[spec],
        years_of_experience=years,
        phone_number=phone,
    )


SAMPLE_ADVOCATES: tuple[NewAdvocate, ...] = (
    _sample("John", "Doe", "New York", "MD", slice(0, 3), 10, 5551234567),
    _sample("Jane", "Smith", "Los Angeles", "PhD", slice(2, 5), 8, 5559876543),
    _sample("Alice", "Johnson", "Chicago", "MSW", slice(4, 6), 5, 5554567890),
    _sample("Michael", "Brown", "Houston", "MD", slice(6, 9), 12, 5556543210),
    _sample("Emily", "Davis", "Phoenix", "PhD", slice(8, 10), 7, 5553210987),
    _sample("Chris", "Martinez", "Philadelphia", "MSW", slice(10, 13), 9, 5557890123),
    _sample("Jessica", "Taylor", "San Antonio", "MD", slice(12, 14), 11, 5554561234),
    _sample("David", "Harris", "San Diego", "PhD", slice(14, 17), 6, 5557896543),
    _sample("Laura", "Clark", "Dallas", "MSW", slice(16, 18), 4, 5550123456),
    _sample("Daniel", "Lewis", "San Jose", "MD", slice(18, 21), 13, 5553217654),
    _sample("Sarah", "Lee", "Austin", "PhD", slice(20, 22), 10, 5551238765),
    _sample("James", "King", "Jacksonville", "MSW", slice(22, 25), 5, 5556540987),
    _sample("Megan", "Green", "San Francisco", "MD", slice(24, 26), 14, 5558765432),
    _sample("Joshua", "Walker", "Columbus", "PhD", slice(0, 2), 9, 5556781234),
    _sample("Amanda", "Hall", "Fort Worth", "MSW", slice(1, 4), 3, 5559872345),
)


def create_random_records(count: int, rng: random.Random | None = None) -> list[NewAdvocate]:
    """Generate *count* plausible advocates.

    Pass a seeded ``random.Random`` for reproducible output.
    """
    rng = rng or random.Random()
    records: list[NewAdvocate] = []
    for _ in range(max(0, count)):
        n_specialties = rng.randint(1, 5)
        records.append(
            NewAdvocate(
                first_name=rng.choice(FIRST_NAMES),
                last_name=rng.choice(LAST_NAMES),
                city=rng.choice(CITIES),
                degree=rng.choice(DEGREES),
                specialties=tuple(rng.sample(SPECIALTIES, n_specialties)),
                years_of_experience=rng.randint(1, 30),
                phone_number=rng.randint(2_000_000_000, 9_999_999_999),
            )
        )
    return records


def build_seed_dataset(random_count: int, rng: random.Random | None = None) -> list[NewAdvocate]:
    """Fixed sample dataset followed by *random_count* generated records."""
    return [*SAMPLE_ADVOCATES, *create_random_records(random_count, rng)]
