from __future__ import annotations

import html
from typing import Iterable, Optional

from app.schemas.components import CodeBlock

CODE_BLOCK_COMPONENT = "shared.code-block"
DEFAULT_LANGUAGE = "javascript"

def escape_html(text: Optional[str]) -> str:
    # Text content: only &, < and > are significant
    return html.escape(text or "", quote=False)

def render_code_block(block: CodeBlock) -> str:
    header = ""
    if block.filename:
        header = f'<div class="code-filename">{html.escape(block.filename)}</div>'
    line_class = "line-numbers" if block.show_line_numbers else ""
    language = html.escape(block.language or DEFAULT_LANGUAGE)
    return (
        f"{header}"
        f'<pre class="{line_class}"><code class="language-{language}">{escape_html(block.code)}</code></pre>'
    )

def process_code_blocks(blocks: Iterable[dict] | None = None) -> str:
    """Render the code-block entries of a dynamic zone as HTML, skipping everything else."""
    rendered = []
    for raw in blocks or []:
        if raw.get("__component") != CODE_BLOCK_COMPONENT:
            continue
        rendered.append(render_code_block(CodeBlock.model_validate(raw)))
    return "".join(rendered)
