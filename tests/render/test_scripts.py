"""Update script and shell script rendering."""

import pytest

from storeconfig.domain.config import RenderRow, Scope
from storeconfig.render.scripts import (
    php_export,
    render_shell_script,
    render_update_script,
    shell_quote,
)


class TestPhpExport:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "NULL"),
            (0, "0"),
            (12, "12"),
            ("plain", "'plain'"),
            ("", "''"),
            ("it's", "'it\\'s'"),
            ("C:\\path", "'C:\\\\path'"),
            ("line\nbreak", "'line\nbreak'"),
            ("a\0b", "'a' . \"\\0\" . 'b'"),
        ],
    )
    def test_literals(self, value, expected):
        assert php_export(value) == expected


class TestUpdateScript:
    def test_header(self):
        assert render_update_script([]) == [
            "<?php",
            "$installer = $this;",
            "# generated by storeconfig",
        ]

    def test_default_scope_uses_two_arguments(self):
        lines = render_update_script([RenderRow("web/unsecure/base_url", Scope.DEFAULT, 0, "http://x")])

        assert lines[3] == "$installer->setConfigData('web/unsecure/base_url', 'http://x');"

    def test_other_scopes_use_four_arguments(self):
        lines = render_update_script(
            [
                RenderRow("web/unsecure/base_url", Scope.STORES, 1, "http://y"),
                RenderRow("web/unsecure/base_url", Scope.WEBSITES, 2, None),
            ]
        )

        assert lines[3:] == [
            "$installer->setConfigData('web/unsecure/base_url', 'http://y', 'stores', '1');",
            "$installer->setConfigData('web/unsecure/base_url', NULL, 'websites', '2');",
        ]

    def test_quotes_are_escaped(self):
        lines = render_update_script([RenderRow("a/b/c", Scope.DEFAULT, 0, "'); drop('")])

        assert lines[3] == "$installer->setConfigData('a/b/c', '\\'); drop(\\'');"


class TestShellQuote:
    def test_always_quotes(self):
        assert shell_quote("simple") == "'simple'"
        assert shell_quote("") == "''"

    def test_single_quote(self):
        assert shell_quote("it's") == "'it'\\''s'"


class TestShellScript:
    def test_line_format(self):
        lines = render_shell_script([RenderRow("web/unsecure/base_url", Scope.STORES, 1, "http://y")])

        assert lines == [
            "config:store:set --scope-id=1 --scope=stores -- 'web/unsecure/base_url' 'http://y'"
        ]

    def test_line_breaks_are_escaped(self):
        lines = render_shell_script([RenderRow("a/b/c", Scope.DEFAULT, 0, "one\ntwo\r\nthree")])

        assert lines == ["config:store:set --scope-id=0 --scope=default -- 'a/b/c' 'one\\ntwo\\r\\nthree'"]
        assert "\n" not in lines[0]

    def test_null_is_bare_token(self):
        lines = render_shell_script([RenderRow("a/b/c", Scope.DEFAULT, 0, None)])

        assert lines == ["config:store:set --scope-id=0 --scope=default -- 'a/b/c' NULL"]

    def test_null_string_is_protected(self):
        lines = render_shell_script([RenderRow("a/b/c", Scope.WEBSITES, 1, "NULL")])

        assert lines == [
            "config:store:set --no-null --scope-id=1 --scope=websites -- 'a/b/c' 'NULL'"
        ]

    def test_quotes_in_value(self):
        lines = render_shell_script([RenderRow("a/b/c", Scope.DEFAULT, 0, "it's")])

        assert lines[0].endswith("-- 'a/b/c' 'it'\\''s'")
