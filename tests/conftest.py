"""
Pytest configuration and shared fixtures for the entity_codegen test suite.
"""

import pytest

from entity_codegen.core.config import GeneratorConfig
from entity_codegen.core.model import (
    Attribute,
    AttributeKind,
    Column,
    CommonType,
    DefaultValue,
    DefaultValueKind,
    ModelIndex,
    load_items,
)
from entity_codegen.languages.typeorm import TypeORMGenerator, TypeScriptTypeMapper


@pytest.fixture
def blog_model_data():
    """Plain-data model: Status enum, User table, Post table relating to User."""
    return [
        {
            "type": "table",
            "name": "User",
            "columns": [
                {
                    "name": "id",
                    "type": {"kind": "common", "type": "int"},
                    "attributes": [
                        {"type": "primary-key", "value": True},
                        {"type": "autoincrement", "value": True},
                    ],
                },
                {
                    "name": "email",
                    "type": {"kind": "chars", "type": "varchar", "size": 255},
                    "attributes": [
                        {"type": "null", "value": False},
                        {"type": "unique", "value": True},
                    ],
                },
                {
                    "name": "status",
                    "type": {"kind": "enum", "type": "enum", "enum_name": "Status"},
                    "attributes": [
                        {"type": "default", "value": {"type": "enum", "enum_value": "active"}},
                    ],
                },
                {
                    "name": "is_admin",
                    "type": {"kind": "common", "type": "boolean"},
                    "attributes": [
                        {"type": "default", "value": {"type": "boolean", "data": True}},
                    ],
                },
            ],
        },
        {
            "type": "table",
            "name": "Post",
            "columns": [
                {
                    "name": "id",
                    "type": {"kind": "common", "type": "int"},
                    "attributes": [
                        {"type": "primary-key", "value": True},
                        {"type": "autoincrement", "value": True},
                    ],
                },
                {
                    "name": "price",
                    "type": {"kind": "decimal", "type": "decimal", "precision": 10, "scale": 2},
                    "attributes": [],
                },
                {
                    "name": "author_id",
                    "type": {
                        "kind": "relation",
                        "type": "relation",
                        "table_name": "User",
                        "foreign_key": "id",
                    },
                    "attributes": [{"type": "null", "value": False}],
                },
                {
                    "name": "editor_id",
                    "type": {
                        "kind": "relation",
                        "type": "relation",
                        "table_name": "User",
                        "foreign_key": "id",
                    },
                },
            ],
        },
        {"type": "enum", "name": "Status", "items": ["active", "inactive"]},
    ]


@pytest.fixture
def blog_items(blog_model_data):
    """The blog model as model items."""
    return load_items(blog_model_data)


@pytest.fixture
def blog_index(blog_items):
    return ModelIndex(blog_items)


@pytest.fixture
def generator():
    """TypeORM generator with default configuration."""
    return TypeORMGenerator(GeneratorConfig())


@pytest.fixture
def type_mapper():
    return TypeScriptTypeMapper()


@pytest.fixture
def make_column():
    """Factory fixture for common-typed columns with flag/default attributes."""

    def _make(name="value", type_="int", descriptor=None, default=None, **flags):
        attributes = []
        for key, value in flags.items():
            attributes.append(Attribute(AttributeKind(key.replace("_", "-")), value))
        if default is not None:
            kind, data = default
            attributes.append(
                Attribute(AttributeKind.DEFAULT, DefaultValue(DefaultValueKind(kind), data))
            )
        return Column(
            name=name,
            type=descriptor or CommonType(type_),
            attributes=tuple(attributes),
        )

    return _make


@pytest.fixture
def file_content():
    """Return a function looking up a generated file's content by item name."""

    def _lookup(item_output, name):
        for generated in item_output.files:
            if generated.filename.rsplit("/", 1)[-1].split(".")[0] == name:
                return generated.content
        raise KeyError(name)

    return _lookup
