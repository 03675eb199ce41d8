import html
import re
from typing import Mapping

PLACEHOLDER_PATTERN = re.compile(r"\$\{([a-z_]+)\}")

REDIRECT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="go-import" content="${import} ${vcs} ${repo}">
<meta http-equiv="refresh" content="0; url=${redirect}">
</head>
<body>
Redirecting to <a href="${redirect}">${redirect}</a>...
</body>
</html>
"""

NO_REDIRECT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="go-import" content="${import} ${vcs} ${repo}">
</head>
</html>
"""


def _render_string(template: str, context: Mapping[str, str]) -> str:
    # Every value is HTML-escaped; unknown placeholders are a programming error.
    return PLACEHOLDER_PATTERN.sub(lambda m: html.escape(context[m.group(1)], quote=True), template)


def render_page(import_path: str, repo: str, vcs: str, redirect: str) -> str:
    """
    Render the HTML page for one import.

    The refresh tag and the body link are only emitted when redirect is non-empty.
    """
    template = REDIRECT_TEMPLATE if redirect else NO_REDIRECT_TEMPLATE
    context = {"import": import_path, "repo": repo, "vcs": vcs, "redirect": redirect or ""}
    return _render_string(template, context)
