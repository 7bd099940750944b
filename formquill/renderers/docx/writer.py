"""Serialise DOCX sections into a WordprocessingML package.

The package is assembled in memory: every part is built with ElementTree and
written into a ZIP archive together with its relationships and
``[Content_Types].xml``.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ...engine.geometry import points_to_emu
from ...exceptions import CompilationError
from .blocks import (
    Block,
    Border,
    DocxSection,
    HeaderFooter,
    HyperlinkRun,
    ImageRun,
    Paragraph,
    SectionProperties,
    Table,
    TextRun,
)

logger = logging.getLogger(__name__)

# OPC namespaces
OPC_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
WP_NS = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
PIC_NS = "http://schemas.openxmlformats.org/drawingml/2006/picture"
CP_NS = "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
EP_NS = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

REL_TYPES = {
    "document": f"{REL_NS}/officeDocument",
    "core": "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties",
    "app": f"{REL_NS}/extended-properties",
    "styles": f"{REL_NS}/styles",
    "settings": f"{REL_NS}/settings",
    "header": f"{REL_NS}/header",
    "footer": f"{REL_NS}/footer",
    "image": f"{REL_NS}/image",
    "hyperlink": f"{REL_NS}/hyperlink",
}

CONTENT_TYPES = {
    "word/document.xml": "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml",
    "word/styles.xml": "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml",
    "word/settings.xml": "application/vnd.openxmlformats-officedocument.wordprocessingml.settings+xml",
    "docProps/core.xml": "application/vnd.openxmlformats-package.core-properties+xml",
    "docProps/app.xml": "application/vnd.openxmlformats-officedocument.extended-properties+xml",
    "header": "application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml",
    "footer": "application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml",
}

MEDIA_TYPES = {"png": "image/png", "jpg": "image/jpeg", "jpeg": "image/jpeg", "gif": "image/gif"}

for _prefix, _uri in (
    ("w", WORD_NS), ("r", REL_NS), ("wp", WP_NS), ("a", A_NS), ("pic", PIC_NS),
    ("cp", CP_NS), ("dc", DC_NS), ("dcterms", DCTERMS_NS), ("xsi", XSI_NS),
):
    ET.register_namespace(_prefix, _uri)


def w(tag: str) -> str:
    return f"{{{WORD_NS}}}{tag}"


def _set(element: ET.Element, **attrs) -> ET.Element:
    for key, value in attrs.items():
        element.set(w(key), str(value))
    return element


def _sub(parent: ET.Element, tag: str, **attrs) -> ET.Element:
    return _set(ET.SubElement(parent, w(tag)), **attrs)


def _serialize(root: ET.Element) -> bytes:
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


class _Part:
    """A story part (document, header or footer) collecting its own relationships."""

    def __init__(self, writer: "DocxPackageWriter", name: str) -> None:
        self.writer = writer
        self.name = name
        self.relationships: List[Tuple[str, str, str, Optional[str]]] = []

    def add_relationship(self, rel_type: str, target: str, external: bool = False) -> str:
        rel_id = f"rId{len(self.relationships) + 1}"
        self.relationships.append((rel_id, REL_TYPES[rel_type], target, "External" if external else None))
        return rel_id

    @property
    def rels_name(self) -> str:
        folder, _, filename = self.name.rpartition("/")
        return f"{folder}/_rels/{filename}.rels"

    # -- blocks ------------------------------------------------------------

    def write_blocks(self, parent: ET.Element, blocks: Sequence[Block]) -> None:
        for block in blocks:
            if isinstance(block, Table):
                self.write_table(parent, block)
            else:
                self.write_paragraph(parent, block)

    def write_paragraph(self, parent: ET.Element, paragraph: Paragraph, section: Optional[ET.Element] = None) -> ET.Element:
        p = _sub(parent, "p")
        ppr = ET.SubElement(p, w("pPr"))
        if paragraph.keep_next:
            _sub(ppr, "keepNext")
        if paragraph.page_break_before:
            _sub(ppr, "pageBreakBefore")
        if paragraph.border_top or paragraph.border_bottom:
            borders = _sub(ppr, "pBdr")
            if paragraph.border_top:
                _border(borders, "top", paragraph.border_top)
            if paragraph.border_bottom:
                _border(borders, "bottom", paragraph.border_bottom)
        if paragraph.shading:
            _sub(ppr, "shd", val="clear", color="auto", fill=paragraph.shading)
        if paragraph.tab_stops:
            tabs = _sub(ppr, "tabs")
            for alignment, position in paragraph.tab_stops:
                _sub(tabs, "tab", val=alignment, pos=position)
        _sub(ppr, "spacing", before=paragraph.spacing_before, after=paragraph.spacing_after)
        if paragraph.indent_left or paragraph.indent_hanging:
            ind = _sub(ppr, "ind", left=paragraph.indent_left)
            if paragraph.indent_hanging:
                _set(ind, hanging=paragraph.indent_hanging)
        if paragraph.alignment:
            _sub(ppr, "jc", val=paragraph.alignment)
        if section is not None:
            ppr.append(section)

        for run in paragraph.runs:
            self.write_run(p, run)
        return p

    def write_run(self, parent: ET.Element, run) -> None:
        if isinstance(run, HyperlinkRun):
            rel_id = self.add_relationship("hyperlink", run.url, external=True)
            link = ET.SubElement(parent, w("hyperlink"))
            link.set(f"{{{REL_NS}}}id", rel_id)
            for child in run.runs:
                self.write_run(link, child)
        elif isinstance(run, ImageRun):
            self.write_image(parent, run)
        elif run.field_code:
            self._write_field(parent, run)
        else:
            r = _sub(parent, "r")
            _run_properties(r, run)
            for index, chunk in enumerate(run.text.split("\t")):
                if index:
                    _sub(r, "tab")
                if chunk:
                    t = _sub(r, "t")
                    t.text = chunk
                    t.set(XML_SPACE, "preserve")

    def _write_field(self, parent: ET.Element, run: TextRun) -> None:
        begin = _sub(parent, "r")
        _run_properties(begin, run)
        _sub(begin, "fldChar", fldCharType="begin")
        instr = _sub(parent, "r")
        _run_properties(instr, run)
        code = _sub(instr, "instrText")
        code.text = f" {run.field_code} "
        code.set(XML_SPACE, "preserve")
        separate = _sub(parent, "r")
        _run_properties(separate, run)
        _sub(separate, "fldChar", fldCharType="separate")
        result = _sub(parent, "r")
        _run_properties(result, run)
        _sub(result, "t").text = run.text or "1"
        end = _sub(parent, "r")
        _run_properties(end, run)
        _sub(end, "fldChar", fldCharType="end")

    def write_image(self, parent: ET.Element, image: ImageRun) -> None:
        media_name = self.writer.add_media(image.data, image.extension)
        rel_id = self.add_relationship("image", f"media/{media_name}")
        drawing_id = self.writer.next_drawing_id()
        cx, cy = str(points_to_emu(image.width)), str(points_to_emu(image.height))

        r = _sub(parent, "r")
        drawing = _sub(r, "drawing")
        inline = ET.SubElement(drawing, f"{{{WP_NS}}}inline", {"distT": "0", "distB": "0", "distL": "0", "distR": "0"})
        ET.SubElement(inline, f"{{{WP_NS}}}extent", {"cx": cx, "cy": cy})
        ET.SubElement(inline, f"{{{WP_NS}}}docPr", {"id": str(drawing_id), "name": f"Picture {drawing_id}", "descr": image.description})
        graphic = ET.SubElement(inline, f"{{{A_NS}}}graphic")
        data = ET.SubElement(graphic, f"{{{A_NS}}}graphicData", {"uri": PIC_NS})
        pic = ET.SubElement(data, f"{{{PIC_NS}}}pic")
        nv = ET.SubElement(pic, f"{{{PIC_NS}}}nvPicPr")
        ET.SubElement(nv, f"{{{PIC_NS}}}cNvPr", {"id": "0", "name": media_name})
        ET.SubElement(nv, f"{{{PIC_NS}}}cNvPicPr")
        fill = ET.SubElement(pic, f"{{{PIC_NS}}}blipFill")
        ET.SubElement(fill, f"{{{A_NS}}}blip", {f"{{{REL_NS}}}embed": rel_id})
        stretch = ET.SubElement(fill, f"{{{A_NS}}}stretch")
        ET.SubElement(stretch, f"{{{A_NS}}}fillRect")
        sp = ET.SubElement(pic, f"{{{PIC_NS}}}spPr")
        xfrm = ET.SubElement(sp, f"{{{A_NS}}}xfrm")
        ET.SubElement(xfrm, f"{{{A_NS}}}off", {"x": "0", "y": "0"})
        ET.SubElement(xfrm, f"{{{A_NS}}}ext", {"cx": cx, "cy": cy})
        geom = ET.SubElement(sp, f"{{{A_NS}}}prstGeom", {"prst": "rect"})
        ET.SubElement(geom, f"{{{A_NS}}}avLst")

    def write_table(self, parent: ET.Element, table: Table) -> None:
        tbl = _sub(parent, "tbl")
        tbl_pr = _sub(tbl, "tblPr")
        total = sum(table.column_widths)
        _sub(tbl_pr, "tblW", w=total, type="dxa")
        if table.indent:
            _sub(tbl_pr, "tblInd", w=table.indent, type="dxa")
        borders = _sub(tbl_pr, "tblBorders")
        for side in ("top", "left", "bottom", "right", "insideH", "insideV"):
            if table.borders:
                _sub(borders, side, val="single", sz=4, space=0, color=table.border_color)
            else:
                _sub(borders, side, val="nil")
        _sub(tbl_pr, "tblLayout", type="fixed")

        grid = _sub(tbl, "tblGrid")
        for width in table.column_widths:
            _sub(grid, "gridCol", w=width)

        for row in table.rows:
            tr = _sub(tbl, "tr")
            if row.height or row.header:
                tr_pr = _sub(tr, "trPr")
                if row.height:
                    _sub(tr_pr, "trHeight", val=row.height, hRule="atLeast")
                if row.header:
                    _sub(tr_pr, "tblHeader")
            for index, cell in enumerate(row.cells):
                tc = _sub(tr, "tc")
                tc_pr = _sub(tc, "tcPr")
                width = cell.width or (table.column_widths[index] if index < len(table.column_widths) else 0)
                _sub(tc_pr, "tcW", w=width, type="dxa")
                if cell.shading:
                    _sub(tc_pr, "shd", val="clear", color="auto", fill=cell.shading)
                for paragraph in cell.paragraphs or [Paragraph()]:
                    self.write_paragraph(tc, paragraph)


def _border(parent: ET.Element, side: str, border: Border) -> None:
    _sub(parent, side, val=border.style, sz=border.size, space=border.space, color=border.color)


def _run_properties(r: ET.Element, run: TextRun) -> None:
    rpr = _sub(r, "rPr")
    _sub(rpr, "rFonts", ascii=run.font, hAnsi=run.font, cs=run.font)
    if run.bold:
        _sub(rpr, "b")
    if run.italic:
        _sub(rpr, "i")
    if run.color:
        _sub(rpr, "color", val=run.color)
    _sub(rpr, "sz", val=run.size)
    _sub(rpr, "szCs", val=run.size)


class DocxPackageWriter:
    """Builds a ``.docx`` archive from sections.

    Args:
        sections: Sections in document order
        title: Document title for the core properties
        author: Document author for the core properties
    """

    def __init__(self, sections: Sequence[DocxSection], title: str = "", author: Optional[str] = None) -> None:
        self.sections = list(sections)
        self.title = title
        self.author = author
        self._parts: Dict[str, bytes] = {}
        self._media: Dict[str, bytes] = {}
        self._overrides: Dict[str, str] = {}
        self._drawing_id = 0

    def add_media(self, data: bytes, extension: str) -> str:
        for name, existing in self._media.items():
            if existing == data:
                return name.rpartition("/")[2]
        name = f"image{len(self._media) + 1}.{extension}"
        self._media[f"word/media/{name}"] = data
        return name

    def next_drawing_id(self) -> int:
        self._drawing_id += 1
        return self._drawing_id

    def to_bytes(self) -> bytes:
        """Serialise the package.

        Raises:
            CompilationError: The archive could not be written
        """
        try:
            self._build_document()
            self._parts["word/styles.xml"] = self._styles_xml()
            self._parts["word/settings.xml"] = self._settings_xml()
            self._parts["docProps/core.xml"] = self._core_xml()
            self._parts["docProps/app.xml"] = self._app_xml()
            self._parts["_rels/.rels"] = _relationships_xml([
                ("rId1", REL_TYPES["document"], "word/document.xml", None),
                ("rId2", REL_TYPES["core"], "docProps/core.xml", None),
                ("rId3", REL_TYPES["app"], "docProps/app.xml", None),
            ])
            for part_name in ("word/document.xml", "word/styles.xml", "word/settings.xml", "docProps/core.xml", "docProps/app.xml"):
                self._overrides[part_name] = CONTENT_TYPES[part_name]
            self._parts["[Content_Types].xml"] = self._content_types_xml()

            buffer = io.BytesIO()
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
                zip_file.writestr("[Content_Types].xml", self._parts.pop("[Content_Types].xml"))
                for file_name, content in self._parts.items():
                    zip_file.writestr(file_name, content)
                for file_name, content in self._media.items():
                    zip_file.writestr(file_name, content)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"DOCX serialisation failed: {e}")
            raise CompilationError("Failed to write DOCX package", str(e)) from e

        logger.debug(f"DOCX package written: {len(self._parts)} parts, {len(self._media)} media files")
        return buffer.getvalue()

    def _build_document(self) -> None:
        document = _Part(self, "word/document.xml")
        document.add_relationship("styles", "styles.xml")
        document.add_relationship("settings", "settings.xml")

        root = ET.Element(w("document"))
        body = _sub(root, "body")
        for index, section in enumerate(self.sections):
            sect_pr = self._section_properties(document, section.properties, index)
            document.write_blocks(body, section.blocks)
            if index < len(self.sections) - 1:
                document.write_paragraph(body, Paragraph(), section=sect_pr)
            else:
                body.append(sect_pr)

        self._parts["word/document.xml"] = _serialize(root)
        self._parts[document.rels_name] = _relationships_xml(document.relationships)

    def _section_properties(self, document: _Part, props: SectionProperties, index: int) -> ET.Element:
        sect_pr = ET.Element(w("sectPr"))
        for kind, content in (("header", props.header), ("footer", props.footer)):
            if content is None:
                continue
            target = f"{kind}{index + 1}.xml"
            self._write_story(kind, f"word/{target}", content)
            rel_id = document.add_relationship(kind, target)
            reference = _sub(sect_pr, f"{kind}Reference", type="default")
            reference.set(f"{{{REL_NS}}}id", rel_id)
        _sub(sect_pr, "pgSz", w=props.page_width, h=props.page_height)
        margins = props.margins
        _sub(
            sect_pr, "pgMar",
            top=margins["top"], right=margins["right"], bottom=margins["bottom"], left=margins["left"],
            header=margins.get("header", margins["top"] // 2), footer=margins.get("footer", margins["bottom"] // 2),
            gutter=0,
        )
        if props.page_number_start is not None:
            _sub(sect_pr, "pgNumType", start=props.page_number_start)
        if props.vertical_align:
            _sub(sect_pr, "vAlign", val=props.vertical_align)
        return sect_pr

    def _write_story(self, kind: str, part_name: str, content: HeaderFooter) -> None:
        story = _Part(self, part_name)
        root = ET.Element(w("hdr" if kind == "header" else "ftr"))
        story.write_blocks(root, content.blocks or [Paragraph()])
        if content.blocks and isinstance(content.blocks[-1], Table):
            story.write_paragraph(root, Paragraph())
        self._parts[part_name] = _serialize(root)
        self._parts[story.rels_name] = _relationships_xml(story.relationships)
        self._overrides[part_name] = CONTENT_TYPES[kind]

    def _styles_xml(self) -> bytes:
        root = ET.Element(w("styles"))
        defaults = _sub(root, "docDefaults")
        rpr = _sub(_sub(defaults, "rPrDefault"), "rPr")
        _sub(rpr, "rFonts", ascii="Arial", hAnsi="Arial", cs="Arial")
        _sub(rpr, "sz", val=22)
        _sub(rpr, "szCs", val=22)
        ppr = _sub(_sub(defaults, "pPrDefault"), "pPr")
        _sub(ppr, "spacing", after=0, line=259, lineRule="auto")
        style = _sub(root, "style", type="paragraph", default=1, styleId="Normal")
        _sub(style, "name", val="Normal")
        return _serialize(root)

    def _settings_xml(self) -> bytes:
        root = ET.Element(w("settings"))
        _sub(root, "defaultTabStop", val=720)
        _sub(root, "compat")
        return _serialize(root)

    def _core_xml(self) -> bytes:
        root = ET.Element(f"{{{CP_NS}}}coreProperties")
        ET.SubElement(root, f"{{{DC_NS}}}title").text = self.title
        if self.author:
            ET.SubElement(root, f"{{{DC_NS}}}creator").text = self.author
        created = ET.SubElement(root, f"{{{DCTERMS_NS}}}created", {f"{{{XSI_NS}}}type": "dcterms:W3CDTF"})
        created.text = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return _serialize(root)

    def _app_xml(self) -> bytes:
        ET.register_namespace("", EP_NS)
        root = ET.Element(f"{{{EP_NS}}}Properties")
        ET.SubElement(root, f"{{{EP_NS}}}Application").text = "formquill"
        return _serialize(root)

    def _content_types_xml(self) -> bytes:
        ET.register_namespace("", CONTENT_TYPES_NS)
        root = ET.Element(f"{{{CONTENT_TYPES_NS}}}Types")
        defaults = {
            "rels": "application/vnd.openxmlformats-package.relationships+xml",
            "xml": "application/xml",
        }
        for media_name in self._media:
            extension = media_name.rpartition(".")[2]
            defaults[extension] = MEDIA_TYPES.get(extension, "application/octet-stream")
        for extension, content_type in defaults.items():
            ET.SubElement(root, f"{{{CONTENT_TYPES_NS}}}Default", {"Extension": extension, "ContentType": content_type})
        for part_name, content_type in self._overrides.items():
            ET.SubElement(root, f"{{{CONTENT_TYPES_NS}}}Override", {"PartName": f"/{part_name}", "ContentType": content_type})
        return _serialize(root)


def _relationships_xml(relationships: List[Tuple[str, str, str, Optional[str]]]) -> bytes:
    ET.register_namespace("", OPC_NS)
    root = ET.Element(f"{{{OPC_NS}}}Relationships")
    for rel_id, rel_type, target, target_mode in relationships:
        rel = ET.SubElement(root, f"{{{OPC_NS}}}Relationship", {"Id": rel_id, "Type": rel_type, "Target": target})
        if target_mode == "External":
            rel.set("TargetMode", "External")
    return _serialize(root)
