"""Diagnostic HTML page shown in place of failed hosted-login content"""

import html


def render_error_page(message: str, url: str, status: int) -> str:
    """Render a self-contained error document

    Args:
        message: Error message, one line per reported error
        url: URL that failed to load
        status: HTTP status or platform error code

    Returns:
        HTML document string
    """
    lines = [line for line in (message or "").splitlines() if line.strip()] or [""]
    paragraphs = "\n".join(
        f'        <p class="message">{html.escape(line)}</p>' for line in lines
    )

    return f"""<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <title>Login failed</title>
        <style>
            body {{ font-family: -apple-system, sans-serif; margin: 2em; color: #333; }}
            .status {{ color: #b00020; }}
            .url {{ font-size: 0.8em; color: #888; word-break: break-all; }}
        </style>
    </head>
    <body>
        <h1>Something went wrong</h1>
        <h3 class="status">Status: {int(status)}</h3>
{paragraphs}
        <p class="url">{html.escape(url or "")}</p>
    </body>
</html>
"""
