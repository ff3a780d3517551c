"""
Tests for blank-line separation between using-directive groups.
"""

import pytest

from hotrefactor.config import HotRefactorConfig
from hotrefactor.refactoring.actions import InvocationContext
from hotrefactor.refactoring.providers import AddNewlineBetweenUsingGroupsProvider
from hotrefactor.refactoring.using_groups import (
    ADD_NEWLINE_TITLE,
    add_separators,
    boundary_trivia,
    detect_line_terminator,
    find_missing_separators,
    is_separated,
    tokens_between,
)
from hotrefactor.syntax import TextSpan, Trivia, TriviaKind, end_of_line, whitespace

BODY = "\nclass Class1\n{\n}"


class TestTopLevelNamespace:
    """Tests for grouping keys of using directives."""

    @pytest.mark.parametrize(
        "directive,expected",
        [
            ("using System;", "System"),
            ("using System.Collections.Generic;", "System"),
            ("using static System.Math;", "System"),
            ("using Text = System.Text;", "System"),
            ("using global::Microsoft.Extensions;", "Microsoft"),
            ("global using Xunit;", "Xunit"),
        ],
    )
    def test_top_level_namespace(self, host, directive, expected):
        tree = host.parse(directive + "\n")
        [using] = tree.root.usings
        assert using.top_level_namespace == expected


class TestSeparationRule:
    """Tests for is_separated over boundary trivia."""

    def test_blank_line(self):
        assert is_separated([end_of_line(), end_of_line()])

    def test_blank_line_with_indentation(self):
        assert is_separated([end_of_line(), whitespace("    "), end_of_line()])

    def test_single_line_end(self):
        assert not is_separated([end_of_line()])

    def test_comment_counts_as_content(self):
        comment = Trivia(TriviaKind.SINGLE_LINE_COMMENT, "// tools")
        assert not is_separated([end_of_line(), comment, end_of_line(), end_of_line()])

    def test_same_line(self):
        assert not is_separated([whitespace()])


class TestAddNewlineBetweenUsingGroups:
    """Behaviour of the using-group refactoring on real sources."""

    @pytest.mark.asyncio
    async def test_namespaces_without_dots(self, using_groups):
        await using_groups.verify(
            "using System;\nusing Microsoft;\n" + BODY,
            "using System;\n\nusing Microsoft;\n" + BODY,
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_namespace_with_single_dot(self, using_groups):
        await using_groups.verify(
            "using System;\nusing System.Text;\nusing Microsoft;\n" + BODY,
            "using System;\nusing System.Text;\n\nusing Microsoft;\n" + BODY,
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_several_boundaries_in_one_action(self, using_groups):
        await using_groups.verify(
            "using System;\nusing Microsoft;\nusing Xunit;\n",
            "using System;\n\nusing Microsoft;\n\nusing Xunit;\n",
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_crlf_is_reused(self, using_groups):
        await using_groups.verify(
            "using System;\r\nusing Microsoft;\r\n",
            "using System;\r\n\r\nusing Microsoft;\r\n",
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_directives_on_one_line(self, using_groups):
        await using_groups.verify(
            "using System; using Microsoft;\n",
            "using System; \n\nusing Microsoft;\n",
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_comment_between_groups(self, using_groups):
        await using_groups.verify(
            "using System;\n// tools\nusing Microsoft;\n",
            "using System;\n\n// tools\nusing Microsoft;\n",
            0,
            ADD_NEWLINE_TITLE,
        )

    @pytest.mark.asyncio
    async def test_already_separated_offers_nothing(self, using_groups):
        source = "using System;\nusing System.Text;\n\nusing Microsoft;\n" + BODY
        assert await using_groups.titles(source) == []

    @pytest.mark.asyncio
    async def test_single_group_offers_nothing(self, using_groups):
        assert await using_groups.titles("using System;\nusing System.Linq;\n") == []
        assert await using_groups.titles("using System;\n") == []

    @pytest.mark.asyncio
    async def test_offered_at_any_position(self, using_groups):
        source = "using System;\nusing Microsoft;\n" + BODY
        assert await using_groups.titles(source, len(source)) == [ADD_NEWLINE_TITLE]

    @pytest.mark.asyncio
    async def test_applying_twice_changes_nothing(self, using_groups):
        new_text = await using_groups.apply(
            "using System;\nusing Microsoft;\n" + BODY, 0, ADD_NEWLINE_TITLE
        )
        assert await using_groups.titles(new_text) == []

    @pytest.mark.asyncio
    async def test_region_between_groups(self, using_groups):
        source = "using System;\n#region x\nusing Microsoft;\n#endregion\nclass C {}"
        new_text = await using_groups.apply(source, 0, ADD_NEWLINE_TITLE)
        assert new_text == "using System;\n\n#region x\nusing Microsoft;\n#endregion\nclass C {}"
        assert await using_groups.titles(new_text) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "source",
        [
            "using System;\n#region x\nusing Microsoft;\n#endregion\n",
            "using System;\n#region Imports\n\nusing Microsoft;\n#endregion\n",
            "#region Imports\nusing System;\n#endregion\n#region More\nusing Microsoft;\n#endregion\n",
            "using System;\n/* first\n   second */\nusing Microsoft;\n",
            "using System; /* first\n   second */ using Microsoft;\n",
            "using System; using Microsoft; using Xunit;\n",
            "using System;\r\n#region x\r\nusing Microsoft;\r\n#endregion\r\n",
        ],
    )
    async def test_applying_once_is_enough(self, using_groups, source):
        assert await using_groups.titles(source) == [ADD_NEWLINE_TITLE]
        new_text = await using_groups.apply(source, 0, ADD_NEWLINE_TITLE)
        assert await using_groups.titles(new_text) == []

    @pytest.mark.asyncio
    async def test_configured_terminator(self, host):
        config = HotRefactorConfig.default()
        config.using_group_settings.line_terminator = "crlf"
        provider = AddNewlineBetweenUsingGroupsProvider(host, config)

        document = host.open_document("using System;\nusing Microsoft;\n")
        [action] = await provider.compute_actions(InvocationContext(document, TextSpan(0)))
        result = await action.apply()
        assert result.text == "using System;\n\r\nusing Microsoft;\n"


class TestTreeEdits:
    """Tests for the tree-level helpers."""

    def test_edited_tree_needs_no_further_separation(self, host):
        tree = host.parse("using System;\nusing Microsoft;\nusing Xunit;\n")
        boundaries = find_missing_separators(tree.root)
        assert boundaries == [0, 1]

        edited = add_separators(tree, boundaries, "\n")
        assert find_missing_separators(edited.root) == []
        assert find_missing_separators(host.parse(edited.text).root) == []

    def test_boundary_includes_nodes_in_between(self, host):
        tree = host.parse("using System;\n#region x\nusing Microsoft;\n#endregion\n")
        first, second = tree.root.usings
        between = tokens_between(tree.root, first, second)
        assert "#region" in "".join(token.text for token in between)

        trivia = boundary_trivia(first, second, between)
        assert not is_separated(trivia)
        assert any(item.kind is TriviaKind.SKIPPED for item in trivia)

    def test_out_of_range_boundaries_ignored(self, host):
        tree = host.parse("using System;\nusing Microsoft;\n")
        assert add_separators(tree, [5], "\n").root is tree.root

    def test_detect_line_terminator(self, host):
        assert detect_line_terminator(host.parse("using A;\r\nusing B;")) == "\r\n"
        assert detect_line_terminator(host.parse("using A;\nusing B;"), "crlf") == "\r\n"
        assert detect_line_terminator(host.parse("using A;\r\n"), "lf") == "\n"
