"""IIIF Presentation API 3.0 schemas.

Only the subset of the Presentation API emitted by the manifest renderer is
modelled here. Models are dumped with ``by_alias=True`` and
``exclude_none=True`` so optional members disappear from the JSON output.

Structure:
    Manifest
    ├── label, requiredStatement, metadata
    └── items: [Canvas]
        ├── items: [AnnotationPage]        # painting
        │   └── items: [Annotation -> ImageBody]
        └── annotations: [AnnotationPage]  # commenting (optional)
            └── items: [Annotation -> TextualBody]

See https://iiif.io/api/presentation/3.0/
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

PRESENTATION_CONTEXT = "http://iiif.io/api/presentation/3/context.json"

LanguageMap = dict[str, list[str]]


def language_map(value: str, language: str = "en") -> LanguageMap:
    """Wrap a single string in a IIIF language map."""
    return {language: [value]}


class MetadataEntry(BaseModel):
    """A label/value pair shown in the viewer's metadata panel."""

    label: LanguageMap
    value: LanguageMap


class RequiredStatement(BaseModel):
    """Attribution text that viewers must display."""

    label: LanguageMap
    value: LanguageMap


class ImageBody(BaseModel):
    """The image painted onto a canvas."""

    id: str
    type: Literal["Image"] = "Image"
    format: str | None = None
    height: NonNegativeInt = 0
    width: NonNegativeInt = 0


class TextualBody(BaseModel):
    """Embedded plain-text content of a commenting annotation."""

    type: Literal["TextualBody"] = "TextualBody"
    language: str = "en"
    format: Literal["text/plain"] = "text/plain"
    value: str


class Annotation(BaseModel):
    """Associates a body with a target canvas.

    Attributes:
        id: Annotation URI
        motivation: "painting" for images, "commenting" for transcripts
        body: ImageBody or TextualBody
        target: The canvas id the body belongs to
    """

    id: str
    type: Literal["Annotation"] = "Annotation"
    motivation: Literal["painting", "commenting"]
    body: ImageBody | TextualBody
    target: str


class AnnotationPage(BaseModel):
    """An ordered list of annotations."""

    id: str
    type: Literal["AnnotationPage"] = "AnnotationPage"
    items: list[Annotation] = []


class Canvas(BaseModel):
    """A single view of the object.

    Width and height mirror the painted image; 0 means the dimensions could
    not be resolved.
    """

    id: str
    type: Literal["Canvas"] = "Canvas"
    height: NonNegativeInt = 0
    width: NonNegativeInt = 0
    items: list[AnnotationPage] = []
    annotations: list[AnnotationPage] | None = None


class Manifest(BaseModel):
    """Top-level IIIF Presentation 3.0 document.

    Attributes:
        context: JSON-LD context, serialized as "@context"
        id: The full URL the manifest was requested from
        label: Display title
        required_statement: Attribution, serialized as "requiredStatement"
        metadata: Descriptive label/value pairs in configured order
        items: Canvases in row and attachment order
    """

    model_config = ConfigDict(populate_by_name=True)

    context: str = Field(default=PRESENTATION_CONTEXT, alias="@context")
    id: str
    type: Literal["Manifest"] = "Manifest"
    label: LanguageMap
    required_statement: RequiredStatement | None = Field(
        default=None, alias="requiredStatement"
    )
    metadata: list[MetadataEntry] = []
    items: list[Canvas] = []

    def to_json_dict(self) -> dict:
        """Dump the manifest using IIIF member names."""
        return self.model_dump(by_alias=True, exclude_none=True)
