"""Report types that could not be inferred."""

from collections.abc import Iterable

from jtypes.cache import TypeDeclaration
from jtypes.normalize import UNKNOWN_ARRAY, type_alias


def unresolved_declarations(
    declarations: Iterable[TypeDeclaration],
) -> list[TypeDeclaration]:
    """Declarations created from empty arrays, in id order."""
    return sorted(
        (d for d in declarations if d.type == UNKNOWN_ARRAY), key=lambda d: d.id
    )


def unknown_array_warning(
    declarations: Iterable[TypeDeclaration], output_name: str
) -> str:
    aliases = "\n".join(
        f"  type {type_alias(d.id)}, derived from {d.contexts[0]}"
        for d in declarations
    )
    return f"""\
The proper array type for the following type aliases could not be
inferred because the provided JSON featured empty arrays:

{aliases}

These type aliases have been given the type "{UNKNOWN_ARRAY}". Opening
{output_name} and manually providing the proper types is recommended."""
