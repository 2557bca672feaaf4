"""
Unit tests for TypeORM column emission.
"""

import pytest

from entity_codegen.core.generator import ForeignKeyNotFoundError, TableNotFoundError
from entity_codegen.core.model import (
    Attribute,
    AttributeKind,
    CharsType,
    Column,
    DecimalType,
    DefaultValue,
    DefaultValueKind,
    EnumType,
    ModelIndex,
    RelationType,
    Table,
)
from entity_codegen.languages.typeorm import ColumnBuilder, format_default_value, is_required


@pytest.fixture
def builder(type_mapper, blog_index):
    return ColumnBuilder(type_mapper, blog_index)


@pytest.fixture
def table():
    return Table(name="Sample")


class TestDefaultValues:
    """Test default-value literal serialization."""

    def test_string_is_quoted(self):
        assert format_default_value(DefaultValue(DefaultValueKind.STRING, "draft")) == "'draft'"

    def test_string_quotes_are_escaped(self):
        value = DefaultValue(DefaultValueKind.STRING, "it's")
        assert format_default_value(value) == "'it\\'s'"

    def test_number_is_bare(self):
        assert format_default_value(DefaultValue(DefaultValueKind.NUMBER, 42)) == "42"
        assert format_default_value(DefaultValue(DefaultValueKind.NUMBER, 1.5)) == "1.5"
        assert format_default_value(DefaultValue(DefaultValueKind.NUMBER, 3.0)) == "3"

    @pytest.mark.parametrize(
        "data, literal",
        [(float("nan"), "NaN"), (float("inf"), "Infinity"), (float("-inf"), "-Infinity")],
    )
    def test_non_finite_numbers_use_javascript_spelling(self, data, literal):
        assert format_default_value(DefaultValue(DefaultValueKind.NUMBER, data)) == literal

    def test_boolean_is_quoted_string(self):
        assert format_default_value(DefaultValue(DefaultValueKind.BOOLEAN, True)) == "'true'"
        assert format_default_value(DefaultValue(DefaultValueKind.BOOLEAN, False)) == "'false'"

    def test_enum_member_is_quoted(self):
        assert format_default_value(DefaultValue(DefaultValueKind.ENUM, "active")) == "'active'"


class TestIsRequired:
    def test_no_attributes_is_nullable(self, make_column):
        assert is_required(make_column()) is False

    def test_explicit_null_decides(self, make_column):
        assert is_required(make_column(null=False)) is True
        assert is_required(make_column(null=True)) is False

    def test_primary_key_without_null_is_required(self, make_column):
        assert is_required(make_column(primary_key=True)) is True

    def test_explicit_null_overrides_primary_key(self, make_column):
        assert is_required(make_column(primary_key=True, null=True)) is False

    def test_first_null_attribute_wins(self, make_column):
        column = make_column()
        column = Column(
            name=column.name,
            type=column.type,
            attributes=(
                Attribute(AttributeKind.NULL, False),
                Attribute(AttributeKind.NULL, True),
            ),
        )
        assert is_required(column) is True


class TestCommonColumn:
    def test_plain_nullable_column(self, builder, table, make_column):
        output = builder.build(make_column("title", "text"), table)

        assert output.lines == (
            "@Column({",
            "  type: 'text',",
            "  nullable: true,",
            "})",
            "title?: string;",
        )
        assert output.field_type == "string"
        assert output.required is False

    def test_generated_primary_key(self, builder, table, make_column):
        column = make_column("id", "int", primary_key=True, autoincrement=True)
        output = builder.build(column, table)

        assert output.lines == (
            "@Column({",
            "  type: 'int',",
            "  nullable: false,",
            "})",
            "@PrimaryGeneratedColumn('increment')",
            "id!: number;",
        )
        assert output.required is True

    def test_plain_primary_key(self, builder, table, make_column):
        output = builder.build(make_column("code", "varchar", primary_key=True), table)

        assert "@PrimaryColumn()" in output.lines
        assert "@PrimaryGeneratedColumn('increment')" not in output.lines
        assert output.lines[-1] == "code!: string;"

    def test_autoincrement_without_primary_key_has_no_effect(self, builder, table, make_column):
        output = builder.build(make_column("seq", "int", autoincrement=True), table)

        assert not any(line.startswith("@Primary") for line in output.lines)

    def test_false_primary_key_flag(self, builder, table, make_column):
        output = builder.build(make_column("id", "int", primary_key=False), table)

        assert not any(line.startswith("@Primary") for line in output.lines)
        assert output.required is False

    def test_boolean_default_is_quoted(self, builder, table, make_column):
        column = make_column("is_active", "boolean", default=("boolean", True))
        output = builder.build(column, table)

        assert "  default: 'true'," in output.lines
        assert "  default: true," not in output.lines

    def test_number_default(self, builder, table, make_column):
        column = make_column("count", "int", null=False, default=("number", 0))
        output = builder.build(column, table)

        assert output.lines[:5] == (
            "@Column({",
            "  type: 'int',",
            "  nullable: false,",
            "  default: 0,",
            "})",
        )

    def test_unique_has_no_emission(self, builder, table, make_column):
        with_unique = builder.build(make_column("slug", "varchar", unique=True), table)
        without_unique = builder.build(make_column("slug", "varchar"), table)

        assert with_unique.lines == without_unique.lines

    def test_timestamp_field_type(self, builder, table, make_column):
        output = builder.build(make_column("created_at", "timestamp"), table)

        assert output.lines[-1] == "created_at?: Date;"


class TestDecimalAndCharsColumns:
    def test_decimal_with_precision_and_scale(self, builder, table, make_column):
        column = make_column("price", descriptor=DecimalType(precision=10, scale=2))
        output = builder.build(column, table)

        assert output.lines == (
            "@Column({",
            "  type: 'decimal',",
            "  precision: 10,",
            "  scale: 2,",
            "  nullable: true,",
            "})",
            "price?: number;",
        )

    def test_decimal_omits_missing_parameters(self, builder, table, make_column):
        output = builder.build(make_column("ratio", descriptor=DecimalType(precision=5)), table)

        assert "  precision: 5," in output.lines
        assert not any("scale" in line for line in output.lines)

    def test_chars_with_length(self, builder, table, make_column):
        column = make_column("email", descriptor=CharsType(size=255), null=False)
        output = builder.build(column, table)

        assert output.lines == (
            "@Column({",
            "  type: 'varchar',",
            "  length: 255,",
            "  nullable: false,",
            "})",
            "email!: string;",
        )

    def test_chars_without_length(self, builder, table, make_column):
        output = builder.build(make_column("name", descriptor=CharsType()), table)

        assert not any("length" in line for line in output.lines)

    def test_decimal_primary_key(self, builder, table, make_column):
        column = make_column("ref", descriptor=DecimalType(), primary_key=True)
        output = builder.build(column, table)

        assert "@PrimaryColumn()" in output.lines


class TestEnumColumn:
    def test_enum_column(self, builder, table, make_column):
        column = make_column(
            "status", descriptor=EnumType("Status"), default=("enum", "active")
        )
        output = builder.build(column, table)

        assert output.lines == (
            "@Column({",
            "  type: 'enum',",
            "  enum: Status,",
            "  nullable: true,",
            "  default: 'active',",
            "})",
            "status?: Status;",
        )
        assert output.field_type == "Status"


class TestRelationColumn:
    def test_relation_emits_navigation_and_scalar_fields(self, builder, make_column):
        post = Table(name="Post")
        column = make_column("author_id", descriptor=RelationType("User", "id"), null=False)

        output = builder.build(column, post)

        assert output.lines == (
            "@ManyToOne(() => User, x => x.id, { nullable: false })",
            "@JoinColumn({ name: 'author_id' })",
            "otm_author_id!: User;",
            "@Column({",
            "  name: 'author_id',",
            "  type: 'int',",
            "  nullable: false,",
            "})",
            "author_id!: number;",
        )
        assert output.navigation_field == "otm_author_id"
        assert output.navigation_type == "User"

    def test_scalar_type_follows_referenced_column(self, builder, make_column):
        # User.email is varchar, so the foreign key scalar is a string
        column = make_column("owner_email", descriptor=RelationType("User", "email"))
        output = builder.build(column, Table(name="Post"))

        assert output.field_type == "string"
        assert "  type: 'varchar'," in output.lines
        assert output.lines[-1] == "owner_email?: string;"

    def test_nullability_comes_from_own_attributes(self, builder, make_column):
        # User.id is a required primary key, the relation column itself is nullable
        column = make_column("editor_id", descriptor=RelationType("User", "id"))
        output = builder.build(column, Table(name="Post"))

        assert output.required is False
        assert output.lines[0] == "@ManyToOne(() => User, x => x.id, { nullable: true })"
        assert "otm_editor_id?: User;" in output.lines

    def test_relation_ignores_default(self, builder, make_column):
        column = make_column(
            "author_id", descriptor=RelationType("User", "id"), default=("number", 1)
        )
        output = builder.build(column, Table(name="Post"))

        assert not any("default" in line for line in output.lines)

    def test_missing_table(self, builder, make_column):
        column = make_column("owner_id", descriptor=RelationType("Account", "id"))

        with pytest.raises(TableNotFoundError) as exc_info:
            builder.build(column, Table(name="Post"))

        assert exc_info.value.reference == "Account"
        assert exc_info.value.column_name == "owner_id"
        assert "Post.owner_id" in str(exc_info.value)

    def test_missing_foreign_key_column(self, builder, make_column):
        column = make_column("author_uuid", descriptor=RelationType("User", "uuid"))

        with pytest.raises(ForeignKeyNotFoundError) as exc_info:
            builder.build(column, Table(name="Post"))

        assert exc_info.value.reference == "User.uuid"
        assert '"uuid"' in str(exc_info.value)
        assert "Post.author_uuid" in str(exc_info.value)

    def test_custom_navigation_prefix(self, type_mapper, blog_index, make_column):
        builder = ColumnBuilder(type_mapper, blog_index, navigation_prefix="rel_")
        column = make_column("author_id", descriptor=RelationType("User", "id"))

        output = builder.build(column, Table(name="Post"))

        assert output.navigation_field == "rel_author_id"


class TestIndentation:
    def test_option_indent_follows_indent_size(self, type_mapper, make_column):
        builder = ColumnBuilder(type_mapper, ModelIndex([]), indent_size=4)
        output = builder.build(make_column("n", "int"), Table(name="T"))

        assert output.lines[1] == "    type: 'int',"
