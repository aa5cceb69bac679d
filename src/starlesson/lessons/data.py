"""Small built-in datasets and samplers shared by the lessons."""

import random
from typing import Dict, List

MTCARS: List[Dict[str, float]] = [
    {"model": "Mazda RX4", "mpg": 21.0, "cyl": 6, "hp": 110, "wt": 2.620},
    {"model": "Mazda RX4 Wag", "mpg": 21.0, "cyl": 6, "hp": 110, "wt": 2.875},
    {"model": "Datsun 710", "mpg": 22.8, "cyl": 4, "hp": 93, "wt": 2.320},
    {"model": "Hornet 4 Drive", "mpg": 21.4, "cyl": 6, "hp": 110, "wt": 3.215},
    {"model": "Hornet Sportabout", "mpg": 18.7, "cyl": 8, "hp": 175, "wt": 3.440},
    {"model": "Valiant", "mpg": 18.1, "cyl": 6, "hp": 105, "wt": 3.460},
    {"model": "Duster 360", "mpg": 14.3, "cyl": 8, "hp": 245, "wt": 3.570},
    {"model": "Merc 240D", "mpg": 24.4, "cyl": 4, "hp": 62, "wt": 3.190},
    {"model": "Merc 230", "mpg": 22.8, "cyl": 4, "hp": 95, "wt": 3.150},
    {"model": "Merc 280", "mpg": 19.2, "cyl": 6, "hp": 123, "wt": 3.440},
    {"model": "Fiat 128", "mpg": 32.4, "cyl": 4, "hp": 66, "wt": 2.200},
    {"model": "Honda Civic", "mpg": 30.4, "cyl": 4, "hp": 52, "wt": 1.615},
    {"model": "Toyota Corolla", "mpg": 33.9, "cyl": 4, "hp": 65, "wt": 1.835},
    {"model": "Camaro Z28", "mpg": 13.3, "cyl": 8, "hp": 245, "wt": 3.840},
    {"model": "Porsche 914-2", "mpg": 26.0, "cyl": 4, "hp": 91, "wt": 2.140},
    {"model": "Ferrari Dino", "mpg": 19.7, "cyl": 6, "hp": 175, "wt": 2.770},
]

DISTRIBUTIONS = {
    "norm": lambda rng: rng.gauss(0, 1),
    "unif": lambda rng: rng.uniform(-2, 2),
    "exp": lambda rng: rng.expovariate(1),
}


def sample(dist: str, n: int, seed: int = 42) -> List[float]:
    """`n` draws from a named distribution, reproducible for a given seed."""
    try:
        draw = DISTRIBUTIONS[dist]
    except KeyError:
        raise ValueError(f"Unknown distribution {dist!r}; choose from {sorted(DISTRIBUTIONS)}") from None
    rng = random.Random(seed)
    return [draw(rng) for _ in range(max(0, int(n)))]
