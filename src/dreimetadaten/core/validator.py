# ABOUTME: Cross-entity consistency checks for a metadata Catalog.
# ABOUTME: Finds duplicate episode/part numbers and inverted chapter ranges.

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from dreimetadaten.metadata.types import Catalog, Chapter, Episode


@dataclass(frozen=True)
class Issue:
    """A single consistency problem, located by a human-readable path."""

    path: str
    message: str


@dataclass
class ValidationResult:
    """Aggregated results from a catalog validation run."""

    checked: int = 0
    duplicate_numbers: list[Issue] = field(default_factory=list)
    duplicate_part_numbers: list[Issue] = field(default_factory=list)
    invalid_chapters: list[Issue] = field(default_factory=list)

    @property
    def issues(self) -> list[Issue]:
        return [*self.duplicate_numbers, *self.duplicate_part_numbers, *self.invalid_chapters]

    @property
    def total_issues(self) -> int:
        """Total number of issues found across all categories."""
        return len(self.issues)

    @property
    def is_valid(self) -> bool:
        return self.total_issues == 0


def _duplicates(numbers: Iterable[int]) -> list[int]:
    counts = Counter(numbers)
    return sorted(number for number, count in counts.items() if count > 1)


def _check_chapters(chapters: tuple[Chapter, ...] | None, path: str, result: ValidationResult) -> None:
    for index, chapter in enumerate(chapters or ()):
        if chapter.start is not None and chapter.end is not None and chapter.end < chapter.start:
            result.invalid_chapters.append(
                Issue(
                    f"{path}.kapitel[{index}]",
                    f"chapter '{chapter.titel}' ends ({chapter.end}) before it starts ({chapter.start})",
                )
            )


def _check_episode(episode: Episode, path: str, result: ValidationResult) -> None:
    _check_chapters(episode.unit.kapitel, path, result)
    teile = episode.teile or ()
    for number in _duplicates(part.teil_nummer for part in teile):
        result.duplicate_part_numbers.append(
            Issue(f"{path}.teile", f"teilNummer {number} appears more than once")
        )
    for index, part in enumerate(teile):
        _check_chapters(part.unit.kapitel, f"{path}.teile[{index}]", result)


def validate_catalog(catalog: Catalog) -> ValidationResult:
    """Check a catalog for problems the type model does not prevent.

    For each collection:
    1. nummer values must be unique within the collection.
    2. teilNummer values must be unique within their episode.
    3. Chapters with both offsets set must not end before they start.

    Args:
        catalog: The catalog to check. It is only read.

    Returns:
        A ValidationResult listing every problem found.
    """
    result = ValidationResult()

    for collection_type, episodes in catalog.collections():
        name = collection_type.value
        for number in _duplicates(episode.nummer for episode in episodes):
            result.duplicate_numbers.append(
                Issue(name, f"nummer {number} appears more than once")
            )
        for index, episode in enumerate(episodes):
            _check_episode(episode, f"{name}[{index}]", result)
            result.checked += 1

    return result
