"""Render type declarations as TypeScript type aliases."""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from jtypes.cache import TypeDeclaration
from jtypes.normalize import is_identifier, type_alias

COMPUTE_HELPER = """\
/**
 * Compute utility which makes resulting types easier to read
 * with IntelliSense by expanding them fully, instead of leaving
 * object properties with cryptic type names.
 */
type C<A extends any> = {[K in keyof A]: A[K]} & {};"""


@dataclass(frozen=True, kw_only=True)
class RenderOptions:
    exported: bool = False
    computed: bool = False
    include_contexts: bool = False


def _property(key: str, ref: str) -> str:
    name = key if is_identifier(key) else json.dumps(key)
    return f"{name}: {ref};"


def type_body(declaration: TypeDeclaration) -> str:
    """Right-hand side of the alias, e.g. `{ a: string; }`."""
    match declaration.type:
        case str(type_):
            return type_
        case dict(properties) if properties:
            members = " ".join(_property(k, v) for k, v in properties.items())
            return f"{{ {members} }}"
        case _:
            return "{}"


def type_declaration(
    declaration: TypeDeclaration, options: RenderOptions = RenderOptions()
) -> str:
    body = type_body(declaration)
    if options.computed:
        body = f"C<{body}>"

    result = f"type {type_alias(declaration.id)} = {body};"
    if options.exported:
        result = f"export {result}"
    if options.include_contexts:
        result += " // " + ", ".join(declaration.contexts)
    return result


def common_declarations(
    declarations: Iterable[TypeDeclaration],
    exported: set[str],
    *,
    computed: bool = False,
    include_contexts: bool = False,
) -> Iterator[str]:
    """Yield the lines of a declaration file, including the trailing newlines.

    Only declarations whose alias is in `exported` are exported.
    """
    if computed:
        yield COMPUTE_HELPER + "\n\n"

    for declaration in declarations:
        options = RenderOptions(
            exported=type_alias(declaration.id) in exported,
            computed=computed,
            include_contexts=include_contexts,
        )
        yield type_declaration(declaration, options) + "\n"
