"""Cover page markup for the HTML output."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import List, Optional

from ...media.images import load_image
from ...models.cover import CoverPage
from ...models.form import FormMetadata

logger = logging.getLogger(__name__)


def render_cover_page(form: FormMetadata, cover: CoverPage, base_path: Optional[Path] = None) -> str:
    """Render the cover as ``<div class="page cover-page">``.

    Logo and cover image are embedded as data URIs so the document stays
    self-contained; an image that cannot be loaded is left out.
    """
    parts: List[str] = ['<div class="page cover-page" data-page="cover">']

    if cover.cover_image:
        image = load_image(cover.cover_image, base_path, "Cover image")
        if image is not None:
            parts.append(
                f'<div class="cover-background" style="background-image: url(\'{image.data_uri()}\')"></div>'
            )

    if cover.watermark:
        parts.append(f'<div class="cover-watermark">{escape(cover.watermark)}</div>')

    parts.append('<div class="cover-content">')
    if cover.logo:
        logo = load_image(cover.logo, base_path, "Logo")
        if logo is not None:
            parts.append(f'<div class="cover-logo"><img src="{logo.data_uri()}" alt="Logo" /></div>')

    parts.append(f'<h1 class="cover-title">{escape(form.title)}</h1>')
    if cover.subtitle:
        parts.append(f'<p class="cover-subtitle">{escape(cover.subtitle)}</p>')
    parts.append('<hr class="cover-divider" />')

    rows = cover.metadata_rows(form.version, form.author)
    if rows:
        parts.append('<table class="cover-metadata">')
        for label, value in rows:
            parts.append(
                f'<tr><td class="cover-meta-label">{escape(label)}:</td>'
                f'<td class="cover-meta-value">{escape(value)}</td></tr>'
            )
        parts.append("</table>")

    if cover.revision_history:
        parts.append('<div class="cover-revision-history">')
        parts.append("<h3>Revision History</h3>")
        parts.append("<table>")
        parts.append("<thead><tr><th>Version</th><th>Date</th><th>Author</th><th>Description</th></tr></thead>")
        parts.append("<tbody>")
        for entry in cover.revision_history:
            cells = "".join(
                f"<td>{escape(value)}</td>"
                for value in (entry.version, entry.date, entry.author, entry.description)
            )
            parts.append(f"<tr>{cells}</tr>")
        parts.append("</tbody></table></div>")
    parts.append("</div>")

    legal = cover.legal_lines()
    if legal:
        parts.append('<div class="cover-legal">')
        parts.extend(f"<p>{escape(text)}</p>" for text in legal)
        parts.append("</div>")

    parts.append("</div>")
    logger.debug(f"Rendered HTML cover page with {len(rows)} metadata rows")
    return "\n".join(parts)
