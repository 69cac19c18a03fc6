"""Unit tests for the CREATE TABLE and DROP statement builders."""

import pytest

from sql_scaffold.errors import ColumnNotFoundError, QueryValidationError
from sql_scaffold.generator.context import RenderContext
from sql_scaffold.query.create_table import (
    ColumnConstraint,
    ConstrainedColumn,
    CreateTableQuery,
)
from sql_scaffold.query.drop import DropBehavior, DropQuery, DropType
from sql_scaffold.schema.base import Column, Table
from sql_scaffold.tree.nodes import CustomSql, TableRef, TypedColumn


@pytest.fixture
def users() -> Table:
    table = Table(name="users", alias="u")
    table.add_column("id", "INTEGER")
    table.add_column("email", "VARCHAR", 255)
    table.add_column("created_at", "TIMESTAMP")
    return table


def test_single_column_without_alias():
    """Test the minimal CREATE TABLE form."""
    table = Table(name="T")
    column = table.add_column("C")

    query = CreateTableQuery(table).add_columns(column)

    assert query.render() == "CREATE TABLE T (C)"


def test_target_alias_is_never_rendered(users):
    """Test the table alias is suppressed even under an aliasing context."""
    query = CreateTableQuery(users, include_columns=True)

    expected = "CREATE TABLE users (id INTEGER, email VARCHAR(255), created_at TIMESTAMP)"
    assert query.render() == expected
    assert query.render(RenderContext(use_table_aliases=True)) == expected


def test_aliasing_does_not_leak_to_siblings(users):
    """Test the alias override is local to the CREATE TABLE subtree."""
    context = RenderContext(use_table_aliases=True)
    CreateTableQuery(users, include_columns=True).render(context)

    assert context.use_table_aliases is True
    assert TableRef(table=users).render(context) == "users u"


def test_include_columns_seeds_in_declaration_order(users):
    """Test auto-seeding adds every declared column in order."""
    query = CreateTableQuery(users, include_columns=True)

    assert len(query.columns.items) == 3
    assert str(query) == (
        "CREATE TABLE users (id INTEGER, email VARCHAR(255), created_at TIMESTAMP)"
    )


def test_custom_table_and_columns():
    """Test raw strings for the table and column declarations."""
    query = CreateTableQuery("audit_log").add_custom_columns("id BIGINT", "message TEXT")

    assert query.render() == "CREATE TABLE audit_log (id BIGINT, message TEXT)"


def test_add_column_with_constraint(users):
    """Test each constraint renders as its trailing clause."""
    id_col, email, created_at = users.columns
    query = (
        CreateTableQuery(users)
        .add_column(id_col, ColumnConstraint.PRIMARY_KEY)
        .add_column(email, ColumnConstraint.UNIQUE)
        .add_column(created_at, ColumnConstraint.NOT_NULL)
    )

    assert query.render() == (
        "CREATE TABLE users (id INTEGER PRIMARY KEY, email VARCHAR(255) UNIQUE, "
        "created_at TIMESTAMP NOT NULL)"
    )


def test_add_custom_column_with_constraint():
    """Test constraints attach to raw column declarations too."""
    query = CreateTableQuery("t").add_custom_column("id INT", ColumnConstraint.NOT_NULL)

    assert query.render() == "CREATE TABLE t (id INT NOT NULL)"


def test_set_column_constraint_keeps_position(users):
    """Test retargeting a constraint leaves sibling columns in place."""
    id_col, email, created_at = users.columns
    query = CreateTableQuery(users, include_columns=True)

    query.set_column_constraint(email, ColumnConstraint.PRIMARY_KEY)

    assert query.render() == (
        "CREATE TABLE users (id INTEGER, email VARCHAR(255) PRIMARY KEY, created_at TIMESTAMP)"
    )
    assert isinstance(query.columns.items[1], ConstrainedColumn)


def test_set_column_constraint_on_prebuilt_declaration():
    """Test a column added as a ready-made declaration node can be constrained."""
    table = Table(name="T")
    column = table.add_column("C", "INT")

    query = CreateTableQuery(table).add_custom_columns(TypedColumn(column=column))
    query.set_column_constraint(column, ColumnConstraint.PRIMARY_KEY)

    assert query.render() == "CREATE TABLE T (C INT PRIMARY KEY)"


def test_set_column_constraint_on_directly_appended_declaration():
    """Test declarations appended straight to the column list are still found."""
    table = Table(name="T")
    first = table.add_column("A", "INT")
    second = table.add_column("B", "TEXT")
    query = CreateTableQuery(table).add_columns(first)
    query.columns.add_node(TypedColumn(column=second))

    query.set_column_constraint(second, ColumnConstraint.NOT_NULL)

    assert query.render() == "CREATE TABLE T (A INT, B TEXT NOT NULL)"


def test_set_column_constraint_after_list_is_rearranged():
    """Test a recorded position that no longer holds the column is not trusted."""
    table = Table(name="T")
    first = table.add_column("A", "INT")
    second = table.add_column("B", "TEXT")
    query = CreateTableQuery(table).add_columns(first, second)
    query.columns.replace_at(0, TypedColumn(column=second))
    query.columns.replace_at(1, TypedColumn(column=first))

    query.set_column_constraint(first, ColumnConstraint.UNIQUE)

    assert query.render() == "CREATE TABLE T (B TEXT, A INT UNIQUE)"


def test_set_column_constraint_replaces_existing_constraint(users):
    """Test a second constraint replaces the first rather than stacking."""
    id_col = users.columns[0]
    query = CreateTableQuery(users).add_column(id_col, ColumnConstraint.NOT_NULL)

    query.set_column_constraint(id_col, ColumnConstraint.PRIMARY_KEY)

    assert query.render() == "CREATE TABLE users (id INTEGER PRIMARY KEY)"


def test_set_column_constraint_miss_is_silent(users):
    """Test retargeting a column that was never added is a no-op."""
    query = CreateTableQuery(users, strict=False).add_columns(users.columns[0])
    before = query.render()

    query.set_column_constraint(users.columns[1], ColumnConstraint.UNIQUE)

    assert query.render() == before


def test_set_column_constraint_miss_raises_when_strict(users):
    """Test strict mode surfaces the miss."""
    query = CreateTableQuery(users, strict=True).add_columns(users.columns[0])

    with pytest.raises(ColumnNotFoundError):
        query.set_column_constraint(users.columns[1], ColumnConstraint.UNIQUE)


def test_strict_mode_defaults_from_config(monkeypatch, users):
    """Test the strict flag falls back to SQL_SCAFFOLD_STRICT_MODE."""
    monkeypatch.setenv("SQL_SCAFFOLD_STRICT_MODE", "true")

    assert CreateTableQuery(users).strict is True
    assert CreateTableQuery(users, strict=False).strict is False


def test_strict_mode_ignores_unrelated_settings(monkeypatch, users):
    """Test a malformed rendering setting does not break construction."""
    monkeypatch.setenv("SQL_SCAFFOLD_USE_TABLE_ALIASES", "not-a-bool")
    monkeypatch.setenv("SQL_SCAFFOLD_STRICT_MODE", "true")

    query = CreateTableQuery(users, include_columns=True)

    assert query.strict is True
    assert query.render().startswith("CREATE TABLE users (id INTEGER")


def test_table_space_clause(users):
    """Test the optional TABLESPACE clause."""
    query = CreateTableQuery(users).add_columns(users.columns[0]).set_table_space("fast_ssd")

    assert query.render() == "CREATE TABLE users (id INTEGER) TABLESPACE fast_ssd"


def test_validate_without_columns_fails(users):
    """Test a table with no columns fails validation."""
    with pytest.raises(QueryValidationError) as exc_info:
        CreateTableQuery(users).validate()

    assert exc_info.value.reason == "Table has no columns"


def test_validate_with_columns_returns_builder(users):
    """Test successful validation returns the builder unchanged."""
    query = CreateTableQuery(users, include_columns=True)
    before = query.render()

    assert query.validate() is query
    assert query.validate() is query
    assert query.render() == before


def test_render_does_not_validate(users):
    """Test an invalid builder still renders."""
    assert CreateTableQuery(users).render() == "CREATE TABLE users ()"


def test_validate_after_mutation_recomputes(users):
    """Test validation reflects the current state of the builder."""
    query = CreateTableQuery("t")
    with pytest.raises(QueryValidationError):
        query.validate()

    query.add_custom_columns("id INT")
    assert query.validate() is query


def test_validate_rejects_columns_of_other_tables(users):
    """Test columns belonging to an unreferenced table fail validation."""
    other = Table(name="accounts")
    foreign = other.add_column("owner", "INTEGER")
    query = CreateTableQuery(users).add_columns(users.columns[0], foreign)

    with pytest.raises(QueryValidationError) as exc_info:
        query.validate()

    assert "accounts.owner" in exc_info.value.reason


def test_validate_accepts_free_standing_columns():
    """Test columns without an owning table are not checked against tables."""
    query = CreateTableQuery("t").add_columns(Column(name="id", type_name="INT"))

    assert query.validate() is query


def test_rendering_is_repeatable_and_tracks_mutation(users):
    """Test render, mutate, render again."""
    query = CreateTableQuery(users).add_columns(users.columns[0])
    first = query.render()

    assert query.render() == first

    query.add_columns(users.columns[1])
    assert query.render() == "CREATE TABLE users (id INTEGER, email VARCHAR(255))"


def test_get_drop_query(users):
    """Test the symmetric DROP statement."""
    query = CreateTableQuery(users, include_columns=True)
    drop = query.get_drop_query()

    assert isinstance(drop, DropQuery)
    assert drop.drop_type is DropType.TABLE
    assert drop.render() == "DROP TABLE users"
    assert drop.target is not query.target


def test_get_drop_query_for_custom_table():
    """Test the DROP statement for a raw table name."""
    assert CreateTableQuery("legacy").get_drop_query().render() == "DROP TABLE legacy"


def test_drop_query_variants(users):
    """Test drop types and behaviours."""
    assert DropQuery(DropType.VIEW, "v_users").render() == "DROP VIEW v_users"
    assert (
        DropQuery.drop_table(users).set_behavior(DropBehavior.CASCADE).render()
        == "DROP TABLE users CASCADE"
    )
    assert DropQuery.drop_view(CustomSql(sql="v")).set_behavior(
        DropBehavior.RESTRICT
    ).render() == "DROP VIEW v RESTRICT"


def test_drop_query_validates(users):
    """Test DROP statements validate their target."""
    drop = DropQuery.drop_table(users)

    assert drop.validate() is drop
