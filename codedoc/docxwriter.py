"""A small WordprocessingML writer and the project documentation generator."""

from __future__ import annotations

import os
import re
import zipfile
from dataclasses import dataclass
from typing import Iterable, Sequence, Union
from xml.sax.saxutils import escape

from codedoc.models import Project

_W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
_INVALID_XML = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    '<Override PartName="/word/styles.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>'
    "</Types>"
)

_ROOT_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/officeDocument" Target="word/document.xml"/>'
    "</Relationships>"
)

_DOCUMENT_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/styles" Target="styles.xml"/>'
    "</Relationships>"
)


def _paragraph_style(style_id: str, name: str, size: int, bold: bool) -> str:
    weight = "<w:b/>" if bold else ""
    return (
        f'<w:style w:type="paragraph" w:styleId="{style_id}">'
        f'<w:name w:val="{name}"/><w:basedOn w:val="Normal"/><w:next w:val="Normal"/>'
        '<w:pPr><w:keepNext/><w:spacing w:before="240" w:after="120"/></w:pPr>'
        f'<w:rPr>{weight}<w:sz w:val="{size}"/></w:rPr></w:style>'
    )


def _styles_xml() -> str:
    headings = "".join(
        _paragraph_style(f"Heading{level}", f"heading {level}", max(36 - 4 * level, 22), True)
        for level in range(1, 10)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:styles xmlns:w="{_W_NS}">'
        '<w:style w:type="paragraph" w:default="1" w:styleId="Normal">'
        '<w:name w:val="Normal"/><w:rPr><w:sz w:val="22"/></w:rPr></w:style>'
        + _paragraph_style("Title", "Title", 56, False)
        + headings
        + "</w:styles>"
    )


def _clean(text: str) -> str:
    return escape(_INVALID_XML.sub("", text))


def _paragraph_xml(text: str, style: str | None) -> str:
    props = f'<w:pPr><w:pStyle w:val="{style}"/></w:pPr>' if style else ""
    runs = "<w:br/>".join(
        f'<w:t xml:space="preserve">{_clean(line)}</w:t>' for line in text.split("\n")
    )
    return f"<w:p>{props}<w:r>{runs}</w:r></w:p>"


@dataclass(frozen=True)
class _Paragraph:
    text: str
    style: str | None

    def to_xml(self) -> str:
        return _paragraph_xml(self.text, self.style)


@dataclass(frozen=True)
class _Table:
    rows: tuple[tuple[str, ...], ...]

    def to_xml(self) -> str:
        columns = max(len(row) for row in self.rows)
        grid = '<w:gridCol w:w="2000"/>' * columns
        borders = "".join(
            f'<w:{side} w:val="single" w:sz="4" w:space="0" w:color="auto"/>'
            for side in ("top", "left", "bottom", "right", "insideH", "insideV")
        )
        body = "".join(
            "<w:tr>"
            + "".join(
                '<w:tc><w:tcPr><w:tcW w:w="0" w:type="auto"/></w:tcPr>'
                f"{_paragraph_xml(cell, None)}</w:tc>"
                for cell in row
            )
            + "</w:tr>"
            for row in self.rows
        )
        return (
            '<w:tbl><w:tblPr><w:tblW w:w="0" w:type="auto"/>'
            f"<w:tblBorders>{borders}</w:tblBorders></w:tblPr>"
            f"<w:tblGrid>{grid}</w:tblGrid>{body}</w:tbl>"
        )


class DocxDocument:
    """An in-memory Word document made of paragraphs and tables."""

    def __init__(self) -> None:
        self._blocks: list[Union[_Paragraph, _Table]] = []

    def add_paragraph(self, text: str = "", style: str | None = None) -> None:
        """Append a paragraph; newlines become line breaks."""
        self._blocks.append(_Paragraph(text, style))

    def add_heading(self, text: str, level: int = 1) -> None:
        """Append a heading; level 0 is the document title, 1 to 9 are headings."""
        if level == 0:
            style = "Title"
        elif 1 <= level <= 9:
            style = f"Heading{level}"
        else:
            raise ValueError(f"heading level must be between 0 and 9, got {level}")
        self.add_paragraph(text, style)

    def add_table(self, rows: Iterable[Sequence[str]]) -> None:
        """Append a bordered table; each row is a sequence of cell texts."""
        table = tuple(tuple(str(cell) for cell in row) for row in rows)
        if not table or not any(table):
            raise ValueError("a table needs at least one cell")
        self._blocks.append(_Table(table))

    def _document_xml(self) -> str:
        body = "".join(block.to_xml() for block in self._blocks)
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:document xmlns:w="{_W_NS}"><w:body>{body}'
            '<w:sectPr><w:pgSz w:w="11906" w:h="16838"/>'
            '<w:pgMar w:top="1440" w:right="1440" w:bottom="1440" w:left="1440" '
            'w:header="708" w:footer="708" w:gutter="0"/></w:sectPr>'
            "</w:body></w:document>"
        )

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the document as a .docx package."""
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as package:
            package.writestr("[Content_Types].xml", _CONTENT_TYPES)
            package.writestr("_rels/.rels", _ROOT_RELS)
            package.writestr("word/_rels/document.xml.rels", _DOCUMENT_RELS)
            package.writestr("word/document.xml", self._document_xml())
            package.writestr("word/styles.xml", _styles_xml())


def _text_section(doc: DocxDocument, title: str, text: str, fallback: str) -> None:
    doc.add_heading(title, 1)
    doc.add_paragraph(text or fallback)


def _list_section(
    doc: DocxDocument, title: str, items: Sequence[str], fallback: str, bullet: bool = True
) -> None:
    doc.add_heading(title, 1)
    if not items:
        doc.add_paragraph(fallback)
        return
    prefix = "• " if bullet else ""
    for item in items:
        doc.add_paragraph(prefix + item)


def _table_section(
    doc: DocxDocument,
    title: str,
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    fallback: str,
) -> None:
    doc.add_heading(title, 1)
    if not rows:
        doc.add_paragraph(fallback)
        return
    doc.add_table([list(header), *rows])


class DocxGenerator:
    """Renders an analysed Project as a Word document."""

    def generate_documentation(self, project: Project, output_path: str | os.PathLike[str]) -> None:
        """Write the documentation for project to output_path, creating its directory."""
        output_dir = os.path.dirname(os.fspath(output_path))
        if output_dir:
            os.makedirs(output_dir, mode=0o755, exist_ok=True)

        doc = DocxDocument()
        doc.add_paragraph(f"{project.name} - Code Documentation", "Title")
        self._add_custom_sections(doc, project)
        doc.save(output_path)

    def _add_custom_sections(self, doc: DocxDocument, p: Project) -> None:
        _text_section(doc, "1. Project Overview", p.overview, "No overview available.")
        _text_section(
            doc, "2. Architecture Diagram", p.architecture, "No architecture diagram provided."
        )
        _list_section(
            doc, "3. Tech Stack Summary", p.tech_stack, "No tech stack information available."
        )
        _table_section(
            doc,
            "4. Folder Structure",
            ("Folder", "Description"),
            list(p.folder_structure.items()),
            "No folder structure information available.",
        )
        _list_section(
            doc, "5. Setup Instructions", p.setup_instructions, "No setup instructions provided."
        )
        _table_section(
            doc,
            "6. API Reference",
            ("Method", "Path", "Description", "Example"),
            [
                (ep.method, ep.path, " → ".join(ep.middleware), ep.handler, ep.curl_example)
                for ep in p.api_endpoints
            ],
            "No API reference available.",
        )
        _table_section(
            doc,
            "7. Parsers Info",
            ("Language", "Parser Details"),
            list(p.parsers_info.items()),
            "No parser information available.",
        )
        _text_section(doc, "8. Data Flow", p.data_flow, "No data flow information provided.")
        _list_section(
            doc, "9. External Services", p.external_services, "No external services listed."
        )
        _list_section(
            doc,
            "10. Deployment Info",
            p.deployment_info,
            "No deployment info provided.",
            bullet=False,
        )
        _list_section(doc, "11. Future Roadmap", p.future_roadmap, "No roadmap provided.")
        _list_section(doc, "12. Common Issues", p.common_issues, "No common issues documented.")
        _list_section(
            doc,
            "13. Developer Notes",
            p.developer_notes,
            "No developer notes provided.",
            bullet=False,
        )