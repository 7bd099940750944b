"""CSS for the page-container HTML output."""

from __future__ import annotations

from ...engine.geometry import points_to_px
from ...styles.stylesheet import ResolvedStylesheet


def _px(value: float) -> str:
    return f"{points_to_px(value):.2f}px"


def font_stack(family: str) -> str:
    base = family.split("-")[0]
    if base.lower().startswith("times"):
        return "'Times New Roman', Times, serif"
    if base.lower().startswith("courier"):
        return "'Courier New', Courier, monospace"
    return f"'{base}', Arial, sans-serif"


def page_css(stylesheet: ResolvedStylesheet) -> str:
    """Page, header, content, field layer and footer rules derived from the stylesheet."""
    size = stylesheet.page_size
    margins = stylesheet.margins
    fonts = stylesheet.fonts
    colors = stylesheet.colors
    return "\n".join(
        [
            "html, body {",
            "  margin: 0;",
            "  padding: 0;",
            "  background: #f5f5f5;",
            f"  font-family: {font_stack(fonts.family)};",
            f"  color: {colors.text};",
            "}",
            ".page {",
            "  position: relative;",
            "  box-sizing: border-box;",
            f"  width: {_px(size.width)};",
            f"  height: {_px(size.height)};",
            f"  padding: {_px(margins.top)} {_px(margins.right)} {_px(margins.bottom)} {_px(margins.left)};",
            "  margin: 16px auto;",
            "  background: #ffffff;",
            "  box-shadow: 0 1px 4px rgba(0, 0, 0, 0.2);",
            "  overflow: hidden;",
            "  page-break-after: always;",
            "}",
            ".page header {",
            "  position: absolute;",
            f"  left: {_px(margins.left)};",
            f"  right: {_px(margins.right)};",
            f"  top: {_px(max(margins.top - 36, 0))};",
            "  display: flex;",
            "  justify-content: space-between;",
            f"  font-size: {_px(fonts.sizes.header)};",
            f"  color: {colors.header};",
            f"  border-bottom: 1px solid {colors.rule};",
            "  padding-bottom: 4px;",
            "}",
            ".page footer {",
            "  position: absolute;",
            f"  left: {_px(margins.left)};",
            f"  right: {_px(margins.right)};",
            f"  bottom: {_px(max(margins.bottom - 45, 0))};",
            f"  font-size: {_px(fonts.sizes.footer)};",
            f"  color: {colors.footer};",
            "}",
            ".footer-row {",
            "  display: grid;",
            "  grid-template-columns: 1fr 1fr 1fr;",
            "  padding-top: 4px;",
            "}",
            ".footer-row.separated {",
            "  border-top-style: solid;",
            "}",
            ".footer-center { text-align: center; }",
            ".footer-right { text-align: right; }",
            ".footer-social {",
            "  display: flex;",
            "  justify-content: center;",
            "  gap: 8px;",
            "  margin-top: 4px;",
            "}",
            ".footer-social a {",
            "  display: inline-flex;",
            "  align-items: center;",
            "  gap: 3px;",
            f"  color: {colors.footer};",
            "  text-decoration: none;",
            "}",
            ".footer-social img { width: 16px; height: 16px; }",
            ".content {",
            "  position: relative;",
            f"  font-size: {_px(fonts.sizes.body)};",
            "  line-height: 1.3;",
            "}",
            ".content h1, .content h2, .content h3, .content h4 {",
            f"  color: {colors.heading};",
            "  margin: 0 0 6px;",
            "}",
            f".content h1 {{ font-size: {_px(fonts.sizes.heading + 4)}; }}",
            f".content h2 {{ font-size: {_px(fonts.sizes.heading)}; }}",
            f".content h3, .content h4 {{ font-size: {_px(max(fonts.sizes.body, fonts.sizes.heading - 2))}; }}",
            ".content h1.form-title {",
            f"  font-size: {_px(fonts.sizes.title)};",
            "  text-align: center;",
            "}",
            ".content p { margin: 0 0 8px; }",
            ".content ul, .content ol { margin: 0 0 8px; padding-left: 21px; }",
            ".content table {",
            "  width: 100%;",
            "  border-collapse: collapse;",
            "  margin-bottom: 8px;",
            f"  font-size: {_px(max(fonts.sizes.body - 1, 6))};",
            "}",
            ".content th, .content td {",
            f"  border: 1px solid {colors.rule};",
            "  padding: 4px;",
            "  text-align: left;",
            "}",
            ".content th { background: #f0f0f0; }",
            f".content hr {{ border: none; border-top: 1px solid {colors.rule}; margin: 10px 0; }}",
            ".field-layer {",
            "  position: absolute;",
            "  inset: 0;",
            "  pointer-events: none;",
            "}",
            ".field-layer > * { position: absolute; pointer-events: auto; box-sizing: border-box; }",
            ".form-field {",
            f"  border: 1px solid {colors.border};",
            f"  background: {colors.field_background};",
            f"  color: {colors.text};",
            "  font-family: inherit;",
            "  margin: 0;",
            "}",
            ".field-label {",
            "  white-space: nowrap;",
            f"  font-size: {_px(fonts.sizes.label)};",
            f"  color: {colors.label};",
            "}",
            ".signature-box {",
            f"  border: 1px solid {colors.border};",
            "}",
            ".signature-box::after {",
            "  content: '';",
            "  position: absolute;",
            "  left: 6px;",
            "  right: 6px;",
            "  bottom: 8px;",
            f"  border-bottom: 1px solid {colors.muted};",
            "}",
            "@media print {",
            "  body { background: none; }",
            "  .page { margin: 0; box-shadow: none; }",
            "}",
        ]
    )


def cover_css() -> str:
    return "\n".join(
        [
            ".cover-page {",
            "  display: flex;",
            "  flex-direction: column;",
            "  justify-content: flex-start;",
            "}",
            ".cover-page header, .cover-page footer { display: none; }",
            ".cover-background {",
            "  position: absolute;",
            "  inset: 0;",
            "  background-size: cover;",
            "  background-position: center;",
            "  background-repeat: no-repeat;",
            "  opacity: 0.15;",
            "  z-index: 0;",
            "}",
            ".cover-watermark {",
            "  position: absolute;",
            "  top: 50%;",
            "  left: 50%;",
            "  transform: translate(-50%, -50%) rotate(-45deg);",
            "  font-size: 72px;",
            "  font-weight: bold;",
            "  color: rgba(200, 200, 200, 0.15);",
            "  white-space: nowrap;",
            "  pointer-events: none;",
            "  z-index: 1;",
            "}",
            ".cover-content {",
            "  position: relative;",
            "  z-index: 2;",
            "  padding: 40px;",
            "  flex: 1;",
            "}",
            ".cover-logo { text-align: center; margin-bottom: 20px; }",
            ".cover-logo img { max-width: 150px; max-height: 80px; object-fit: contain; }",
            ".cover-title {",
            "  text-align: center;",
            "  font-size: 28px;",
            "  font-weight: bold;",
            "  color: #1a1a2e;",
            "  margin: 0 0 8px;",
            "}",
            ".cover-subtitle { text-align: center; font-size: 16px; color: #444; margin: 0 0 16px; }",
            ".cover-divider { border: none; border-top: 1px solid #ccc; margin: 16px 40px 20px; }",
            ".cover-metadata { margin: 0 40px 20px; border-collapse: collapse; }",
            ".cover-metadata td { padding: 3px 12px 3px 0; font-size: 10px; vertical-align: top; }",
            ".cover-meta-label { font-weight: bold; color: #333; white-space: nowrap; }",
            ".cover-meta-value { color: #444; }",
            ".cover-revision-history { margin: 16px 40px 0; }",
            ".cover-revision-history h3 { font-size: 11px; color: #333; margin: 0 0 6px; }",
            ".cover-revision-history table { width: 100%; border-collapse: collapse; font-size: 9px; }",
            ".cover-revision-history th {",
            "  background: #f0f0f0;",
            "  color: #333;",
            "  padding: 4px 8px;",
            "  text-align: left;",
            "  border: 1px solid #ddd;",
            "}",
            ".cover-revision-history td { padding: 3px 8px; color: #444; border: 1px solid #ddd; }",
            ".cover-legal {",
            "  position: relative;",
            "  z-index: 2;",
            "  text-align: center;",
            "  padding: 0 40px 20px;",
            "  margin-top: auto;",
            "}",
            ".cover-legal p { font-size: 8px; color: #888; margin: 2px 0; }",
        ]
    )


def build_css(stylesheet: ResolvedStylesheet, include_cover: bool = False) -> str:
    parts = [page_css(stylesheet)]
    if include_cover:
        parts.append(cover_css())
    return "\n".join(parts)
