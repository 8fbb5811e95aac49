"""Tests for the canvas, transcript and metadata builders."""

from unittest.mock import MagicMock

import pytest

from iiif_manifest_renderer.adapters import ExportRepository
from iiif_manifest_renderer.builders import (
    CanvasBuilder,
    MetadataMapper,
    TranscriptAnnotator,
)
from iiif_manifest_renderer.entities import Attachment, TranscriptSource
from schemas.export import ContentExport

CANVAS_ID = "https://repo.example.org/node/1/item/10"


@pytest.fixture
def node(repository):
    return repository.get("node", "1")


@pytest.fixture
def attachment():
    return Attachment(
        file_url="https://repo.example.org/files/page1.jpg",
        mime_type="image/jpeg",
    )


def _repository_with_transcripts(sample_export_data, texts):
    """Repository whose node 1 has one extracted_text medium per text."""
    data = dict(sample_export_data)
    data["entities"] = [
        e for e in sample_export_data["entities"] if e.get("bundle") != "extracted_text"
    ]
    for i, text in enumerate(texts):
        data["entities"].append({
            "entity_type": "media",
            "id": f"{50 + i}",
            "bundle": "extracted_text",
            "fields": {
                "field_media_of": [{"target_id": "1", "target_type": "node"}],
                "field_edited_text": [{"value": text}],
            },
        })
    return ExportRepository(ContentExport.model_validate(data))


# ---------------------------------------------------------------------------
# Tests: TranscriptAnnotator
# ---------------------------------------------------------------------------

class TestTranscriptAnnotator:
    def test_one_annotation_per_transcript(self, sample_export_data):
        """Each non-empty transcript becomes a commenting annotation."""
        repository = _repository_with_transcripts(sample_export_data, ["First", "Second"])
        annotator = TranscriptAnnotator(repository)

        annotations = annotator.get_transcripts(repository.get("node", "1"), CANVAS_ID)

        assert [a.body.value for a in annotations] == ["First", "Second"]
        for annotation in annotations:
            assert annotation.motivation == "commenting"
            assert annotation.target == CANVAS_ID
            assert annotation.body.type == "TextualBody"
            assert annotation.body.format == "text/plain"
            assert annotation.body.language == "en"

    def test_annotation_ids_are_shared(self, sample_export_data):
        """All transcript annotations carry the same anno-1 id."""
        repository = _repository_with_transcripts(sample_export_data, ["First", "Second"])
        annotator = TranscriptAnnotator(repository)

        annotations = annotator.get_transcripts(repository.get("node", "1"), CANVAS_ID)

        assert {a.id for a in annotations} == {f"{CANVAS_ID}/annopage-2/anno-1"}

    def test_empty_texts_are_skipped(self, sample_export_data):
        """Media with empty text produce no annotation."""
        repository = _repository_with_transcripts(sample_export_data, ["", "Kept"])
        annotator = TranscriptAnnotator(repository)

        annotations = annotator.get_transcripts(repository.get("node", "1"), CANVAS_ID)

        assert [a.body.value for a in annotations] == ["Kept"]

    def test_other_bundles_are_ignored(self, repository):
        """Only media of the transcript bundle are read."""
        annotator = TranscriptAnnotator(repository, bundle="hocr")

        assert annotator.get_transcripts(repository.get("node", "1"), CANVAS_ID) == []

    def test_no_entity(self, repository):
        """Without an entity there are no transcripts."""
        assert TranscriptAnnotator(repository).get_transcripts(None, CANVAS_ID) == []

    def test_configured_language(self, repository):
        """The text language follows the annotator's language."""
        annotator = TranscriptAnnotator(repository, language="fr")

        annotations = annotator.get_transcripts(repository.get("node", "1"), CANVAS_ID)

        assert annotations[0].body.language == "fr"


# ---------------------------------------------------------------------------
# Tests: CanvasBuilder
# ---------------------------------------------------------------------------

class TestCanvasBuilder:
    def test_painting_annotation(self, node, attachment):
        """The canvas paints the attachment with its dimensions."""
        canvas = CanvasBuilder().build(node, attachment, 640, 480, CANVAS_ID)

        assert canvas.id == CANVAS_ID
        assert (canvas.width, canvas.height) == (640, 480)
        assert len(canvas.items) == 1

        page = canvas.items[0]
        assert page.id == f"{CANVAS_ID}/annopage-1"
        assert len(page.items) == 1

        painting = page.items[0]
        assert painting.id == f"{CANVAS_ID}/annopage-1/anno-1"
        assert painting.motivation == "painting"
        assert painting.target == CANVAS_ID
        assert painting.body.id == attachment.file_url
        assert painting.body.format == "image/jpeg"
        assert (painting.body.width, painting.body.height) == (640, 480)

    def test_no_annotations_without_annotator(self, node, attachment):
        """Without an annotator the canvas has no annotations member."""
        canvas = CanvasBuilder().build(node, attachment, 1, 1, CANVAS_ID)

        assert canvas.annotations is None
        assert "annotations" not in canvas.model_dump(exclude_none=True)

    def test_transcripts_page(self, sample_export_data, attachment):
        """Two transcripts end up in one commenting annotation page."""
        repository = _repository_with_transcripts(sample_export_data, ["First", "Second"])
        builder = CanvasBuilder(TranscriptAnnotator(repository))

        canvas = builder.build(repository.get("node", "1"), attachment, 1, 1, CANVAS_ID)

        assert len(canvas.annotations) == 1
        page = canvas.annotations[0]
        assert page.id == f"{CANVAS_ID}/annopage-2"
        assert len(page.items) == 2
        assert all(a.target == CANVAS_ID for a in page.items)

    def test_empty_transcripts_add_no_page(self, node, attachment):
        """An annotator returning nothing leaves annotations unset."""
        source = MagicMock(spec=TranscriptSource)
        source.get_media.return_value = []
        builder = CanvasBuilder(TranscriptAnnotator(source))

        canvas = builder.build(node, attachment, 1, 1, CANVAS_ID)

        assert canvas.annotations is None
        source.get_media.assert_called_once_with(node)


# ---------------------------------------------------------------------------
# Tests: MetadataMapper
# ---------------------------------------------------------------------------

class TestMetadataMapper:
    def test_plain_and_reference_fields(self, repository, node):
        """Plain values are used as-is, references resolve to the term name."""
        mapper = MetadataMapper(repository)

        metadata = mapper.build_metadata(
            node, {"Creator": "field_creator", "Library": "field_digital_library"}
        )

        assert [m.model_dump() for m in metadata] == [
            {"label": {"en": ["Creator"]}, "value": {"en": ["Jane Doe"]}},
            {"label": {"en": ["Library"]}, "value": {"en": ["Special Collections"]}},
        ]

    def test_mapping_order_is_preserved(self, repository, node):
        """Entries follow mapping order, not entity field order."""
        mapper = MetadataMapper(repository)

        metadata = mapper.build_metadata(
            node, {"Library": "field_digital_library", "Creator": "field_creator"}
        )

        assert [m.label["en"][0] for m in metadata] == ["Library", "Creator"]

    def test_absent_field_is_skipped(self, repository, node):
        """Fields the entity does not have produce no entry."""
        mapper = MetadataMapper(repository)

        metadata = mapper.build_metadata(
            node, {"Date": "field_edtf_date", "Creator": "field_creator"}
        )

        assert [m.label["en"][0] for m in metadata] == ["Creator"]

    def test_empty_value_is_skipped(self, sample_export_data):
        """Fields present but empty produce no entry."""
        sample_export_data["entities"][0]["fields"]["field_creator"] = [{"value": ""}]
        repository = ExportRepository(ContentExport.model_validate(sample_export_data))

        metadata = MetadataMapper(repository).build_metadata(
            repository.get("node", "1"), {"Creator": "field_creator"}
        )

        assert metadata == []

    def test_missing_reference_target(self, sample_export_data, caplog):
        """A reference to a missing entity is skipped with a warning."""
        sample_export_data["entities"][0]["fields"]["field_digital_library"] = [
            {"target_id": "999", "target_type": "taxonomy_term"}
        ]
        repository = ExportRepository(ContentExport.model_validate(sample_export_data))

        metadata = MetadataMapper(repository).build_metadata(
            repository.get("node", "1"), {"Library": "field_digital_library"}
        )

        assert metadata == []
        assert "references missing taxonomy_term/999" in caplog.text

    def test_no_entity(self, repository):
        """Without an entity there is no metadata."""
        assert MetadataMapper(repository).build_metadata(None, {"Creator": "field_creator"}) == []

    def test_language(self, repository, node):
        """Language maps use the mapper's language."""
        metadata = MetadataMapper(repository, language="de").build_metadata(
            node, {"Creator": "field_creator"}
        )

        assert metadata[0].value == {"de": ["Jane Doe"]}
