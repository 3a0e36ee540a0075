"""Unit tests for the env_text module."""

from splurge_dotenv_rotator.env_parser import parse
from splurge_dotenv_rotator.env_text import append, replace


class TestReplace:
    """Test in-place value replacement."""

    def test_replace_double_quoted(self):
        src = '# header\nDOTENV_PUBLIC_KEY="old"\nHELLO=World\n'
        assert replace(src, "DOTENV_PUBLIC_KEY", "new") == '# header\nDOTENV_PUBLIC_KEY="new"\nHELLO=World\n'

    def test_replace_keeps_unquoted_style(self):
        assert replace("A=old # note\n", "A", "new") == "A=new # note\n"

    def test_replace_quotes_when_needed(self):
        assert replace("A=old\n", "A", "has space") == 'A="has space"\n'

    def test_replace_single_quoted(self):
        assert replace("A='old'\n", "A", "new") == "A='new'\n"

    def test_replace_single_quoted_falls_back_to_double(self):
        assert replace("A='old'\n", "A", "it's") == 'A="it\'s"\n'

    def test_replace_keeps_export_and_spacing(self):
        assert replace("export  A = old\n", "A", "new") == "export  A = new\n"

    def test_replace_empty_value(self):
        assert replace("A=\nB=1\n", "A", "new") == "A=new\nB=1\n"

    def test_replace_missing_name_is_noop(self):
        src = "A=1\n# B=2\n"
        assert replace(src, "B", "new") is src

    def test_replace_does_not_touch_prefix_names(self):
        src = "API_KEY=1\nAPI_KEY_OLD=2\n"
        assert replace(src, "API_KEY", "9") == "API_KEY=9\nAPI_KEY_OLD=2\n"

    def test_replace_multiline_value(self):
        src = 'A="x\ny"\nB=1\n'
        assert replace(src, "A", "z") == 'A="z"\nB=1\n'

    def test_replace_round_trips_through_parse(self):
        value = 'quote " backslash \\ newline \n end'
        assert parse(replace('A="old"\n', "A", value)) == {"A": value}

    def test_replace_preserves_crlf(self):
        assert replace('A="old"\r\nB=1\r\n', "A", "new") == 'A="new"\r\nB=1\r\n'

    def test_replace_only_matching_old_value(self):
        src = "SECRET=plain-default\nSECRET=\"encrypted:abc\"\n"
        assert replace(src, "SECRET", "encrypted:new", old_value="encrypted:abc") == (
            "SECRET=plain-default\nSECRET=\"encrypted:new\"\n"
        )

    def test_replace_old_value_mismatch_is_noop(self):
        src = "A=1\n"
        assert replace(src, "A", "2", old_value="9") is src

    def test_replace_without_old_value_rewrites_duplicates(self):
        assert replace("A=1\nA=2\n", "A", "3") == "A=3\nA=3\n"


class TestAppend:
    """Test line appending."""

    def test_append_to_text_with_newline(self):
        assert append("A=1\n", "KEY", "v") == 'A=1\nKEY="v"\n'

    def test_append_adds_missing_newline(self):
        assert append("A=1", "KEY", "v") == 'A=1\nKEY="v"\n'

    def test_append_to_empty_text(self):
        assert append("", "KEY", "v") == 'KEY="v"\n'

    def test_append_uses_crlf(self):
        assert append("A=1\r\n", "KEY", "v") == 'A=1\r\nKEY="v"\r\n'

    def test_append_is_not_idempotent(self):
        once = append("", "KEY", "v")
        assert append(once, "KEY", "v") == 'KEY="v"\nKEY="v"\n'
