# topmark:header:start
#
#   project      : PagePress
#   file         : encoder.py
#   file_relpath : src/pagepress/pipeline/steps/encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Non-ASCII encoding step (profiles with ``non_ascii`` set)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pagepress.config.logging import get_logger
from pagepress.pipeline.steps.base import BaseStep
from pagepress.text.entities import apply_escapes, encode_named, to_numeric_entities

if TYPE_CHECKING:
    from pagepress.config.logging import PagepressLogger
    from pagepress.pipeline.context import RenderedDocument

logger: PagepressLogger = get_logger(__name__)


def encode_document(text: str, *, is_xml: bool) -> str:
    """Encode non-ASCII characters and backslash escapes as entities.

    In XML documents every named entity is then rewritten to its numeric form.
    """
    text = encode_named(apply_escapes(text))
    return to_numeric_entities(text) if is_xml else text


class EncoderStep(BaseStep):
    """Replace non-ASCII characters by character references."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, doc: RenderedDocument) -> bool:
        return doc.profile.non_ascii

    def run(self, doc: RenderedDocument) -> None:
        doc.text = encode_document(doc.text, is_xml=doc.is_xml)
