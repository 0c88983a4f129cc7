"""Mermaid stateDiagram export, plus a standalone HTML page around it."""

from __future__ import annotations

import html
import re

from fsmviz.models import Automaton

MERMAID_CDN = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.esm.min.mjs"

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script type="module">
        import mermaid from '{cdn}';
        mermaid.initialize({{ startOnLoad: true, theme: 'default' }});
    </script>
    <style>
        body {{
            font-family: Arial, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
        }}
        .mermaid {{
            text-align: center;
            background: white;
            border: 1px solid #ddd;
            border-radius: 8px;
            padding: 20px;
            margin: 20px 0;
        }}
        h1 {{
            color: #333;
            text-align: center;
        }}
        .info {{
            background: #f5f5f5;
            padding: 10px;
            border-radius: 4px;
            margin-bottom: 20px;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <div class="info">
        <p><strong>Note:</strong> this diagram is rendered in the browser by Mermaid.js and needs network access.</p>
    </div>
    <div class="mermaid">
{diagram}
    </div>
</body>
</html>
"""


def sanitize_state_name(name: object) -> str:
    """Replace whitespace and hyphens; quote names containing non-ASCII text."""
    sanitized = re.sub(r"[\s-]", "_", str(name))
    if not sanitized.isascii():
        return f'"{sanitized}"'
    return sanitized


def export_mermaid(automaton: Automaton) -> str:
    """Export an Automaton as a Mermaid ``stateDiagram-v2`` block."""
    lines = ["stateDiagram-v2"]

    if automaton.initial_state is not None:
        lines.append(f"    [*] --> {sanitize_state_name(automaton.initial_state)}")

    for t in automaton.transitions:
        from_s = sanitize_state_name(t.from_state)
        to_s = sanitize_state_name(t.to_state)
        lines.append(f"    {from_s} --> {to_s} : {t.label}")

    for name in automaton.final_states:
        lines.append(f"    {sanitize_state_name(name)} --> [*]")

    return "\n".join(lines)


def export_mermaid_html(automaton: Automaton, title: str = "State Diagram") -> str:
    """Wrap the Mermaid diagram in an HTML page that renders it client-side."""
    return _HTML_TEMPLATE.format(
        title=html.escape(title),
        cdn=MERMAID_CDN,
        diagram=export_mermaid(automaton),
    )
