"""Tests for rendering output schemas into prompt text."""

import pytest

from career_assistant.domain.value_objects import OutputSchema, SchemaType
from career_assistant.infrastructure.schema_text import (
    render_schema_text,
    structured_output_instruction,
)
from career_assistant.services import output_schemas


def test_object_rendering():
    schema = OutputSchema.object(
        {
            "score": OutputSchema.integer("0-100"),
            "summary": OutputSchema.string("Overall impression"),
            "passed": OutputSchema.boolean(),
            "chance": OutputSchema.string(enum=("Low", "High")),
            "notes": OutputSchema.array(OutputSchema.string()),
        },
        required=("score", "summary", "passed", "chance"),
    )

    assert render_schema_text(schema) == (
        "{\n"
        '  "score": number (0-100),\n'
        '  "summary": "Overall impression",\n'
        '  "passed": true | false,\n'
        '  "chance": "Low" | "High",\n'
        '  "notes": ["string"] (optional)\n'
        "}"
    )


def test_every_feature_schema_mentions_all_its_fields():
    text = render_schema_text(output_schemas.TAILORED_RESUME)

    for name, _ in output_schemas.TAILORED_RESUME.properties:
        assert f'"{name}"' in text
    assert '"salaryInINR"' in text
    assert '"High" | "Medium" | "Low" | "Remote Only"' in text


def test_instruction_names_container_kind():
    assert "JSON array" in structured_output_instruction(output_schemas.JOB_LISTINGS)
    assert "JSON object" in structured_output_instruction(output_schemas.JOB_METADATA)


def test_array_without_items_is_rejected():
    with pytest.raises(ValueError, match="without items"):
        render_schema_text(OutputSchema(type=SchemaType.ARRAY))
