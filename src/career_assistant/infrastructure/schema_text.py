"""Render an :class:`OutputSchema` as a JSON skeleton for prompt text.

Generic providers have no schema parameter, so the expected structure is
spelled out in the prompt instead.
"""

from __future__ import annotations

from career_assistant.domain.value_objects import OutputSchema, SchemaType

_INDENT = "  "


def render_schema_text(schema: OutputSchema, depth: int = 0) -> str:
    """Return a JSON-like skeleton describing *schema*."""
    if schema.type is SchemaType.OBJECT:
        inner = _INDENT * (depth + 1)
        entries = []
        for name, node in schema.properties:
            entry = f'{inner}"{name}": {render_schema_text(node, depth + 1)}'
            if name not in schema.required:
                entry += " (optional)"
            entries.append(entry)
        return "{\n" + ",\n".join(entries) + "\n" + _INDENT * depth + "}"

    if schema.type is SchemaType.ARRAY:
        if schema.items is None:
            raise ValueError("array schema without items")
        return f"[{render_schema_text(schema.items, depth)}]"

    if schema.enum:
        return " | ".join(f'"{value}"' for value in schema.enum)

    if schema.type is SchemaType.STRING:
        return f'"{schema.description or "string"}"'

    if schema.type is SchemaType.BOOLEAN:
        return "true | false"

    # integer / number
    if schema.description:
        return f"number ({schema.description})"
    return "number"


def structured_output_instruction(schema: OutputSchema) -> str:
    """Closing instruction appended to prompts that must come back as JSON."""
    kind = "array" if schema.type is SchemaType.ARRAY else "object"
    return (
        f"Return ONLY a valid JSON {kind} matching this structure, "
        "with no surrounding text:\n"
        f"{render_schema_text(schema)}"
    )
