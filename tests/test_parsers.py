"""Tests for prompt line parsing."""

from terminal_radio.utils.parsers import parse_command, split_args


class TestSplitArgs:
    """Tests for split_args()."""

    def test_plain_words(self) -> None:
        assert split_args("a  b") == ["a", "b"]

    def test_double_quoted_span(self) -> None:
        assert split_args('http://host/s "Late Night Jazz"') == [
            "http://host/s",
            "Late Night Jazz",
        ]

    def test_single_quoted_span(self) -> None:
        assert split_args("'classic fm' 2") == ["classic fm", "2"]

    def test_unclosed_quote_runs_to_end(self) -> None:
        assert split_args('"Classic FM') == ["Classic FM"]

    def test_apostrophe_inside_word(self) -> None:
        """A quote in the middle of a word is part of the word."""
        assert split_args("bob's station") == ["bob's", "station"]

    def test_url_with_query_kept_whole(self) -> None:
        assert split_args("http://host/s?a=1&b=2") == ["http://host/s?a=1&b=2"]


class TestParseCommand:
    """Tests for parse_command()."""

    def test_command_lowercased(self) -> None:
        assert parse_command("PLAY 2") == ("play", ["2"])

    def test_quoted_args_resolved(self) -> None:
        """Quoted station names arrive as a single argument."""
        assert parse_command('url http://host/s "My Station"') == (
            "url",
            ["http://host/s", "My Station"],
        )
        assert parse_command("play 'classic fm'") == ("play", ["classic fm"])

    def test_empty_input(self) -> None:
        assert parse_command("   ") == ("", [])
