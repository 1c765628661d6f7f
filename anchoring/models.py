"""
Data models for text anchoring.

The selector shape follows the W3C Web Annotation Data Model: a
TextPositionSelector (character offsets) combined with a TextQuoteSelector
(exact text plus prefix/suffix context). Records serialize with camelCase
aliases so the persisted form matches the annotation vocabulary.
"""

from __future__ import annotations

from typing import Any, Self

import yaml
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StringMatch(_Record):
    """
    A substring of the document within bounded edit distance of a pattern.

    Attributes:
        start: Character offset where the match begins
        end: Character offset where the match ends (exclusive)
        errors: Edit distance between the pattern and text[start:end]
    """

    start: int
    end: int
    errors: int


class QuoteMatch(_Record):
    """
    A ranked candidate location for a quote.

    Attributes:
        start: Character offset where the match begins
        end: Character offset where the match ends (exclusive)
        score: Confidence between 0.0 and 1.0 that this is the intended quote
        errors: Edit distance between the quote and the matched text
    """

    start: int
    end: int
    score: float
    errors: int = 0


class MatchContext(_Record):
    """
    Optional disambiguation hints for locating a quote.

    Missing or empty values mean "no information", never "must be empty".

    Attributes:
        prefix: Expected text immediately before the quote
        suffix: Expected text immediately after the quote
        hint: Expected approximate start offset (e.g. the previous position)
    """

    prefix: str | None = None
    suffix: str | None = None
    hint: int | None = None


class TextPosition(_Record):
    """Offsets of a re-anchored quote."""

    start_offset: int
    end_offset: int


class TextSelector(_Record):
    """
    Anchor record for a quote inside a document.

    Example:
        selector = compute_selector(text, "brown fox")
        assert text[selector.start_offset:selector.end_offset] == selector.exact

    Attributes:
        start_offset: Start character offset in the document
        end_offset: End character offset in the document (exclusive)
        exact: The literal document text at [start_offset, end_offset)
        prefix: Up to CONTEXT_LENGTH characters before the quote
        suffix: Up to CONTEXT_LENGTH characters after the quote
    """

    start_offset: int
    end_offset: int
    exact: str
    prefix: str = ""
    suffix: str = ""

    @model_validator(mode="after")
    def _check_offsets(self) -> Self:
        if self.start_offset < 0 or self.end_offset < self.start_offset:
            msg = (
                f"Invalid offsets [{self.start_offset}, {self.end_offset}): "
                "expected 0 <= start_offset <= end_offset"
            )
            raise ValueError(msg)
        return self

    def is_valid_for(self, text: str) -> bool:
        """True if the offsets still point at `exact` inside `text`."""
        return (
            self.end_offset <= len(text)
            and text[self.start_offset : self.end_offset] == self.exact
        )

    @classmethod
    def from_annotation(cls, yaml_text: str) -> Self:
        """
        Load a TextSelector from a W3C Web Annotation (YAML or JSON).

        The target selector can be a single mapping carrying both offsets
        and quote fields, or a list combining a TextPositionSelector and a
        TextQuoteSelector:

            selector = TextSelector.from_annotation('''
                target:
                  selector:
                    - type: TextPositionSelector
                      start: 10
                      end: 19
                    - type: TextQuoteSelector
                      exact: "brown fox"
                      prefix: "The quick "
            ''')

        Raises:
            ValueError: If the document has no usable selector
        """
        data = yaml.safe_load(yaml_text)
        if not isinstance(data, dict):
            raise ValueError("Annotation must be a mapping")

        target = data.get("target")
        if not isinstance(target, dict):
            raise ValueError("Annotation has no target mapping")

        raw = target.get("selector", {})
        parts = raw if isinstance(raw, list) else [raw]

        fields: dict[str, Any] = {}
        for part in parts:
            if not isinstance(part, dict):
                continue
            if "start" in part:
                fields["start_offset"] = part["start"]
            if "end" in part:
                fields["end_offset"] = part["end"]
            for key in ("exact", "prefix", "suffix"):
                if key in part:
                    fields[key] = part[key] or ""

        missing = {"start_offset", "end_offset", "exact"} - fields.keys()
        if missing:
            raise ValueError(f"Annotation selector is missing {sorted(missing)}")
        return cls(**fields)

    def to_annotation(self) -> str:
        """Serialize as a W3C Web Annotation target in YAML."""
        data = {
            "target": {
                "selector": [
                    {
                        "type": "TextPositionSelector",
                        "start": self.start_offset,
                        "end": self.end_offset,
                    },
                    {
                        "type": "TextQuoteSelector",
                        "exact": self.exact,
                        "prefix": self.prefix,
                        "suffix": self.suffix,
                    },
                ]
            }
        }
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


class Highlight(_Record):
    """
    A persisted highlight owning one selector.

    The anchoring module never stores highlights; callers persist them and
    pass them back in when the owning document changes.

    Attributes:
        id: Highlight identifier
        entry_id: Identifier of the document the selector points into
        part_analysis_id: Identifier of the analysis that proposed the quote
        selector: Anchor of the quote in the document
        reasoning: Optional explanation attached by the analysis
        is_stale: True when the offsets are not known to be valid
    """

    id: str | None = None
    entry_id: str | None = None
    part_analysis_id: str | None = None
    selector: TextSelector
    reasoning: str | None = None
    is_stale: bool = False
