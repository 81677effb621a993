from dataclasses import dataclass


@dataclass
class Scale:
    name: str
    vertices: int
    edges: int

SCALES = {
    "small":  Scale("small", 1_000, 5_000),
    "medium": Scale("medium", 10_000, 50_000),
    "large":  Scale("large", 100_000, 500_000),
    "huge":   Scale("huge", 1_000_000, 2_000_000),
}
