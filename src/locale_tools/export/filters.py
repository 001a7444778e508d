"""Option validation and string type filter resolution for exports."""

from typing import Iterable, Optional

from ..errors import InvalidFilterError, OptionConflictError
from ..models import StringStatus

# Underscored spellings are accepted as synonyms of the canonical labels
TYPE_SYNONYMS = {
    "not_customized": StringStatus.NOT_CUSTOMIZED,
    "customized": StringStatus.CUSTOMIZED,
    "not_translated": StringStatus.NOT_TRANSLATED,
    **{status.value: status for status in StringStatus},
}

# Order used when listing the allowed types
TYPE_ORDER = (
    StringStatus.NOT_CUSTOMIZED,
    StringStatus.CUSTOMIZED,
    StringStatus.NOT_TRANSLATED,
)


def split_csv(value: Optional[str]) -> list[str]:
    """Split a comma separated option value, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def validate_export_options(
    langcode: Optional[str],
    template: bool,
    types: Optional[Iterable[str]] = None,
) -> None:
    """Check the langcode/template/types combination before any data access.

    Raises:
        OptionConflictError: If neither langcode nor template is set, or
            types are given together with template
    """
    if not langcode and not template:
        raise OptionConflictError(
            "Set --langcode=LANGCODE or --template, see help for more information."
        )
    if template and types:
        raise OptionConflictError(
            "No need for --types, when --template is used, see help for more information."
        )


def resolve_status_filter(types: Optional[Iterable[str]] = None) -> frozenset[StringStatus]:
    """Map requested string types to canonical statuses.

    Args:
        types: Type tokens in hyphenated or underscored spelling

    Returns:
        The selected statuses; all of them when no types are given

    Raises:
        InvalidFilterError: If any token is not a known type
    """
    tokens = [token.strip() for token in (types or []) if token.strip()]
    if not tokens:
        return StringStatus.all()

    invalid = [token for token in tokens if token not in TYPE_SYNONYMS]
    if invalid:
        allowed = ", ".join(status.value for status in TYPE_ORDER)
        raise InvalidFilterError(f"Allowed types: {allowed}.")

    return frozenset(TYPE_SYNONYMS[token] for token in tokens)
