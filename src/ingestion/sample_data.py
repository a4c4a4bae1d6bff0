"""Synthetic water samples for demos and tests."""

from datetime import datetime, timedelta

import numpy as np

from src.ingestion.normalizer import CleanedSample, Coordinates, Location

# Typical values for a clean municipal source
BASE_VALUES: dict[str, float] = {
    "pH": 7.0,
    "temperature": 25.0,
    "turbidity": 2.0,
    "totalDissolvedSolids": 200.0,
    "electricalConductivity": 500.0,
    "dissolvedOxygen": 8.0,
    "biochemicalOxygenDemand": 2.0,
    "chemicalOxygenDemand": 5.0,
    "arsenic": 0.005,
    "lead": 0.005,
    "mercury": 0.0005,
    "cadmium": 0.001,
    "chromium": 0.025,
    "nickel": 0.01,
    "copper": 0.5,
    "zinc": 1.5,
    "iron": 0.15,
    "manganese": 0.05,
    "nitrate": 22.5,
    "nitrite": 1.5,
    "phosphate": 0.05,
    "ammonia": 0.25,
    "totalColiforms": 0.0,
    "fecalColiforms": 0.0,
    "eColi": 0.0,
}

DEMO_CENTER = (28.6139, 77.2090)


def generate_sample_data(
    count: int = 10,
    seed: int | None = None,
    variation: float = 0.3,
    end_date: datetime | None = None,
) -> list[CleanedSample]:
    """Generate random samples spread over the last 30 days.

    Args:
        count: Number of samples
        seed: Seed for reproducible output
        variation: Total relative spread around each base value
        end_date: Latest possible sample date (default: now)

    Returns:
        List of CleanedSample objects
    """
    rng = np.random.default_rng(seed)
    end = end_date or datetime.now()
    samples: list[CleanedSample] = []

    for i in range(count):
        offset = timedelta(days=float(rng.uniform(0, 30)))
        parameters = {
            name: max(0.0, base + (float(rng.random()) - 0.5) * base * variation)
            for name, base in BASE_VALUES.items()
        }
        samples.append(
            CleanedSample(
                sample_date=end - offset,
                location=Location(
                    name=f"Sample Site {i + 1}",
                    coordinates=Coordinates(
                        latitude=DEMO_CENTER[0] + (float(rng.random()) - 0.5) * 0.1,
                        longitude=DEMO_CENTER[1] + (float(rng.random()) - 0.5) * 0.1,
                    ),
                    region="Delhi NCR",
                    state="Delhi",
                    country="India",
                ),
                parameters=parameters,
            )
        )

    return samples
