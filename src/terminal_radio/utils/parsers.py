"""
Input parsing for the interactive prompt.

Station names and stream titles often contain spaces, so arguments may be
wrapped in single or double quotes:

    url http://host/stream "Late Night Jazz"
    play 'classic fm'
"""

import re
from typing import List

# A quoted span (closing quote optional) or a bare word. A quote inside a
# word ("bob's") does not start a span.
_TOKEN = re.compile(r""""([^"]*)"?|'([^']*)'?|(\S+)""")


def split_args(text: str) -> List[str]:
    """Split text on whitespace, keeping quoted spans together.

    An unclosed quote runs to the end of the line.

    Example:
        'http://host/s "Late Night Jazz"' -> ['http://host/s', 'Late Night Jazz']
    """
    tokens = []
    for match in _TOKEN.finditer(text):
        double, single, bare = match.groups()
        if double is not None:
            tokens.append(double.strip())
        elif single is not None:
            tokens.append(single.strip())
        else:
            tokens.append(bare)
    return tokens


def parse_command(user_input: str) -> tuple[str, List[str]]:
    """Parse a prompt line into a lowercase command and its arguments.

    Returns:
        (command, args) with quotes already resolved, ("", []) for blank input
    """
    tokens = split_args(user_input.strip())
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]


__all__ = ["split_args", "parse_command"]
