from dataclasses import dataclass


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    up: str
    down: str
