"""Secret reference expressions: "vault:<path>" or "vault:<path>:<field>"."""

from typing import Any

from vaultssl.bundles.exceptions import InvalidReferenceError
from vaultssl.bundles.models import DEFAULT_PREFIX, SecretReference

FIELD_SEPARATOR = ":"


def is_reference(value: Any, prefix: str = DEFAULT_PREFIX) -> bool:
    """True if value is a non-blank string starting with the prefix."""
    return isinstance(value, str) and bool(value.strip()) and value.startswith(prefix)


def parse_reference(
    expression: str, default_field: str, prefix: str = DEFAULT_PREFIX
) -> SecretReference:
    """
    Parse a reference expression into a path and field.

    The field is the text after the last separator, so paths may contain
    the separator themselves. Without an explicit field (or with a trailing
    separator) the whole remainder is the path and default_field is used.

    Examples:
        >>> parse_reference("vault:secret/data/ssl/svc", "certificate")
        SecretReference(path='secret/data/ssl/svc', field='certificate')
        >>> parse_reference("vault:a:b:c", "certificate")
        SecretReference(path='a:b', field='c')

    Raises:
        InvalidReferenceError: If the expression lacks the prefix or has an
            empty path
    """
    if not is_reference(expression, prefix):
        raise InvalidReferenceError(
            f"Path does not start with vault prefix '{prefix}': {expression!r}"
        )

    remainder = expression[len(prefix):]
    if not remainder.strip():
        raise InvalidReferenceError(f"Empty vault path after prefix: {expression!r}")

    index = remainder.rfind(FIELD_SEPARATOR)
    if 0 < index < len(remainder) - 1:
        return SecretReference(path=remainder[:index], field=remainder[index + 1:])

    return SecretReference(path=remainder, field=default_field)
