"""Tests for ClauseAligner, StatementRenderer and SqlRenderer on hand-built trees."""

from sqlign.config import FormatConfig, format_config_context
from sqlign.nodes import SyntaxNode
from sqlign.output import RenderOutput
from sqlign.renderers import ClauseAligner, NodePrinter, SqlRenderer, StatementRenderer, column_width, render_sql


class TestClauseAligner:
    """Per-statement column alignment of clause lines."""

    def test_scenario_alignment(self, scenario_tree) -> None:
        """Clause keywords end on the same column."""
        stmt = scenario_tree.root.children[0]
        out = RenderOutput()
        ClauseAligner(NodePrinter(scenario_tree.buffer)).render_statement(stmt, out)
        assert out.build() == "SELECT a.b\n  FROM t\n WHERE x = 1\n"

    def test_column_width_is_longest_label(self, scenario_tree) -> None:
        """Width is the longest direct child kind label."""
        assert column_width(scenario_tree.root.children[0]) == len("select_clause")

    def test_column_width_defaults_to_zero(self) -> None:
        """A statement without clauses has width zero."""
        assert column_width(SyntaxNode("select_statement")) == 0

    def test_one_line_per_clause(self, factory) -> None:
        """Each clause gets its own line, padded by label length."""
        f = factory
        stmt = f.node(
            "select_statement",
            f.node("select_clause", f.leaf("SELECT"), f.leaf("a")),
            f.node("group_by_clause", f.leaf("GROUP"), f.leaf("BY"), f.leaf("a")),
            f.node("limit_clause", f.leaf("LIMIT"), f.leaf("5")),
        )
        out = RenderOutput()
        ClauseAligner(NodePrinter(f.buffer)).render_statement(stmt, out)
        assert out.build().splitlines() == ["  SELECT a", "GROUP BY a", "   LIMIT 5"]

    def test_terminal_clause_child(self, factory) -> None:
        """A clause that is itself a terminal prints its text."""
        f = factory
        stmt = f.node("commit_statement", f.leaf("COMMIT", "commit_clause"))
        out = RenderOutput()
        ClauseAligner(NodePrinter(f.buffer)).render_statement(stmt, out)
        assert out.build() == "COMMIT\n"

    def test_padding_uses_label_not_text(self, factory) -> None:
        """Padding follows the kind label, not the rendered keyword."""
        f = factory
        stmt = f.node(
            "select_statement",
            f.node("a_clause", f.leaf("LONGKEYWORD")),
            f.node("much_longer_clause", f.leaf("X")),
        )
        out = RenderOutput()
        ClauseAligner(NodePrinter(f.buffer)).render_statement(stmt, out)
        assert out.build() == "          LONGKEYWORD\nX\n"


class TestStatementRenderer:
    """Statement sequencing and terminators."""

    def test_terminator_after_block(self, scenario_tree) -> None:
        """The terminator sits on its own line after the clauses."""
        out = RenderOutput()
        StatementRenderer(scenario_tree.buffer).render(scenario_tree.root, out)
        assert out.build() == "SELECT a.b\n  FROM t\n WHERE x = 1\n;\n"

    def test_empty_statement(self, factory) -> None:
        """A statement with no clauses renders as the terminator alone."""
        tree = factory.tree(SyntaxNode("statement"))
        assert render_sql(tree) == ";\n"

    def test_non_statements_skipped(self, factory) -> None:
        """Root-level comments, terminators and unknown kinds are skipped."""
        f = factory
        stmt = f.node("select_statement", f.node("select_clause", f.leaf("SELECT"), f.leaf("1")))
        tree = f.tree(
            f.leaf("-- header", "comment"),
            stmt,
            f.leaf(";", "terminator"),
            f.node("junk", f.leaf("??")),
        )
        assert render_sql(tree) == "SELECT 1\n;\n"

    def test_two_statements_aligned_independently(self, factory) -> None:
        """Each statement computes its own column width."""
        f = factory
        first = f.node(
            "select_statement",
            f.node("select_clause", f.leaf("SELECT"), f.leaf("a")),
            f.node("from_clause", f.leaf("FROM"), f.leaf("t")),
        )
        second = f.node(
            "delete_statement",
            f.node("delete_clause", f.leaf("DELETE")),
            f.node("from_clause", f.leaf("FROM"), f.leaf("t")),
            f.node("where_clause", f.leaf("WHERE"), f.binary(f.leaf("a"), ">", f.leaf("1"))),
        )
        assert render_sql(f.tree(first, second)) == (
            "SELECT a\n  FROM t\n;\nDELETE\n  FROM t\n WHERE a > 1\n;\n"
        )

    def test_statement_order_preserved(self, factory) -> None:
        """Statements come out in source order."""
        f = factory
        stmts = [
            f.node("select_statement", f.node("select_clause", f.leaf("SELECT"), f.leaf(str(i))))
            for i in range(5)
        ]
        lines = render_sql(f.tree(*stmts)).splitlines()
        assert lines[0::2] == [f"SELECT {i}" for i in range(5)]
        assert lines[1::2] == [";"] * 5


class TestSqlRenderer:
    """Whole-tree rendering and configuration."""

    def test_deterministic(self, scenario_tree) -> None:
        """Rendering the same tree twice gives the same text."""
        renderer = SqlRenderer()
        assert renderer.render(scenario_tree) == renderer.render(scenario_tree)

    def test_explicit_config(self, scenario_tree) -> None:
        """An explicit config sets terminator and line break."""
        config = FormatConfig(terminator="GO", newline="\r\n")
        text = SqlRenderer(config).render(scenario_tree)
        assert text == "SELECT a.b\r\n  FROM t\r\n WHERE x = 1\r\nGO\r\n"

    def test_context_config(self, scenario_tree) -> None:
        """render_sql picks up the active context config."""
        with format_config_context(FormatConfig(terminator="/")):
            assert render_sql(scenario_tree).endswith("\n/\n")
        assert render_sql(scenario_tree).endswith("\n;\n")

    def test_custom_statement_suffix(self, factory) -> None:
        """Only kinds with the configured suffix count as statements."""
        f = factory
        stmt = f.node("select_stmt", f.node("select_clause", f.leaf("SELECT"), f.leaf("1")))
        tree = f.tree(stmt)
        assert render_sql(tree) == ""
        assert render_sql(tree, config=FormatConfig(statement_suffix="_stmt")) == "SELECT 1\n;\n"
