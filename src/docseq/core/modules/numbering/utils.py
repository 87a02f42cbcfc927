import re

from docseq import utils
from docseq.core.modules.numbering.models import DocumentNumber
from docseq.errors import InvalidKeyError, InvalidValueError, ParseError

DOCUMENT_NUMBER_RE = re.compile(
    r"^(?P<prefix>[A-Za-z][A-Za-z_-]{0,15})(?P<sequence>[0-9]+)(?P<affix>[A-Za-z][A-Za-z0-9_-]*)?$", re.ASCII
)


def normalize_affix(affix: str | None) -> str:
    """Strip an optional affix; blank means no affix."""
    if affix is None:
        return ""
    affix = affix.strip()
    if affix and not utils.is_affix(affix):
        raise InvalidValueError(f"Invalid affix: '{affix}'")
    return affix


def build_document_number(prefix: str, sequence: int, width: int = 5, affix: str | None = None) -> DocumentNumber:
    """Validate the parts and build a DocumentNumber."""
    if not utils.is_counter_key(prefix):
        raise InvalidKeyError(f"Invalid document number prefix: '{prefix}'")
    if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 0:
        raise InvalidValueError(f"Sequence must be a non-negative integer, got {sequence!r}")
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise InvalidValueError(f"Width must be a positive integer, got {width!r}")
    return DocumentNumber(prefix=prefix, sequence=sequence, width=width, affix=normalize_affix(affix))


def format_document_number(prefix: str, sequence: int, width: int = 5, affix: str | None = None) -> str:
    """Zero-pad `sequence` to `width` digits behind `prefix`.

    format_document_number("MO", 42) == "MO00042"
    format_document_number("PO", 123456) == "PO123456"
    """
    return build_document_number(prefix, sequence, width, affix).formatted


def parse_document_number(value: str) -> DocumentNumber:
    """Split a previously issued document number into prefix, sequence and affix.

    The returned width is the number of digits found in the input.
    """
    match = DOCUMENT_NUMBER_RE.fullmatch(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ParseError(f"Invalid document number: '{value}'")
    digits = match.group("sequence")
    return DocumentNumber(
        prefix=match.group("prefix"),
        sequence=int(digits),
        width=len(digits),
        affix=match.group("affix") or "",
    )
