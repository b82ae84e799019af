# ABOUTME: Unit tests for catalog consistency validation.
# ABOUTME: Validates duplicate number detection, chapter range checks, and result aggregation.

from dreimetadaten.core.validator import Issue, ValidationResult, validate_catalog
from dreimetadaten.metadata.types import Catalog, Chapter, Episode, Part, RecordingUnit


class TestValidationResult:
    """Tests for the ValidationResult dataclass."""

    def test_default_result_is_clean(self) -> None:
        """A default ValidationResult has no issues."""
        result = ValidationResult()
        assert result.checked == 0
        assert result.total_issues == 0
        assert result.is_valid is True

    def test_total_issues(self) -> None:
        """total_issues counts all problem categories."""
        result = ValidationResult(
            duplicate_numbers=[Issue("serie", "a")],
            invalid_chapters=[Issue("serie[0].kapitel[0]", "b"), Issue("serie[1].kapitel[0]", "c")],
        )
        assert result.total_issues == 3
        assert result.is_valid is False


class TestValidateCatalog:
    """Tests for validate_catalog()."""

    def test_sample_catalog_is_valid(self, sample_catalog: Catalog) -> None:
        """The sample catalog has no issues."""
        result = validate_catalog(sample_catalog)
        assert result.is_valid
        assert result.checked == 3

    def test_duplicate_nummer_in_collection(self) -> None:
        """Repeated numbers within one collection are reported once per number."""
        catalog = Catalog(serie=[Episode(1), Episode(2), Episode(1), Episode(1)])
        result = validate_catalog(catalog)
        assert result.duplicate_numbers == [Issue("serie", "nummer 1 appears more than once")]

    def test_same_nummer_across_collections_allowed(self) -> None:
        """Numbers only need to be unique within their own collection."""
        catalog = Catalog(serie=[Episode(1)], spezial=[Episode(1)], die_dr3i=[Episode(1)])
        assert validate_catalog(catalog).is_valid

    def test_duplicate_teil_nummer(self) -> None:
        """Repeated part numbers within an episode are reported."""
        catalog = Catalog(serie=[Episode(5, teile=[Part(1), Part(1)])])
        result = validate_catalog(catalog)
        assert len(result.duplicate_part_numbers) == 1
        assert result.duplicate_part_numbers[0].path == "serie[0].teile"

    def test_inverted_chapter(self) -> None:
        """A chapter that ends before it starts is reported with its location."""
        part = Part(1, unit=RecordingUnit(kapitel=[Chapter("ok", 0, 10), Chapter("bad", 50, 20)]))
        catalog = Catalog(serie=[Episode(3, teile=[part])])
        result = validate_catalog(catalog)
        assert [issue.path for issue in result.invalid_chapters] == ["serie[0].teile[0].kapitel[1]"]

    def test_open_ended_chapter_ok(self) -> None:
        """Chapters missing an offset are not checked."""
        catalog = Catalog(serie=[Episode(1, unit=RecordingUnit(kapitel=[Chapter("x", start=90)]))])
        assert validate_catalog(catalog).is_valid
