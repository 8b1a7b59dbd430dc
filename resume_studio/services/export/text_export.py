"""
Text Export

Serializes a resume document, not its rendered view, into a labeled
plain-text layout and packages the same layout as a DOCX file.
"""

from io import BytesIO
from typing import List, Tuple

from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import Inches, Pt, RGBColor

from resume_studio.schemas.resume_document_schema import ResumeDocument
from .resume_view import degree_line, format_date, format_date_range, join_nonempty


SECTION_LABELS = ("SUMMARY", "EXPERIENCE", "EDUCATION", "SKILLS", "PROJECTS")
CERTIFICATIONS_LABEL = "CERTIFICATIONS"


def _block(*lines: str) -> str:
    return "\n".join(line.strip() for line in lines if line and line.strip())


def text_sections(document: ResumeDocument) -> Tuple[str, List[Tuple[str, List[str]]]]:
    """
    Build the header block and the labeled sections of the text layout.

    The five fixed sections are always present, even when empty.
    Certifications are appended only when the document has some.
    """
    info = document.personal_info
    header = _block(info.full_name, join_nonempty((info.email, info.phone, info.location), " | "))

    experience = [
        _block(
            join_nonempty((e.position, e.company), " at "),
            format_date_range(e.start_date, e.end_date, e.is_current),
            e.description,
        )
        for e in document.experience
        if e.has_content()
    ]
    education = [
        _block(
            degree_line(e.degree, e.field),
            e.institution,
            format_date_range(e.start_date, e.end_date),
        )
        for e in document.education
        if not e.is_blank()
    ]
    skills = join_nonempty((s.name for s in document.skills), ", ")
    projects = [
        _block(p.name, p.technologies, p.description)
        for p in document.projects
        if not p.is_blank()
    ]

    sections = list(zip(SECTION_LABELS, ([_block(info.summary)], experience, education, [skills], projects)))

    certifications = [
        _block(c.name, c.issuer, format_date(c.date))
        for c in document.certifications
        if not c.is_blank()
    ]
    if certifications:
        sections.append((CERTIFICATIONS_LABEL, certifications))

    return header, [(label, [b for b in blocks if b]) for label, blocks in sections]


def serialize_resume_text(document: ResumeDocument) -> str:
    """Labeled plain-text resume, blocks separated by blank lines."""
    header, sections = text_sections(document)

    parts = [header] if header else []
    for label, blocks in sections:
        parts.append("\n".join([label, "\n\n".join(blocks)]) if blocks else label)
    return "\n\n".join(parts)


def _add_bottom_border(paragraph):
    """Add a bottom border to a paragraph."""
    pPr = paragraph._p.get_or_add_pPr()
    pBdr = parse_xml(
        f'<w:pBdr {nsdecls("w")}>'
        '<w:bottom w:val="single" w:sz="6" w:space="1" w:color="000000"/>'
        '</w:pBdr>'
    )
    pPr.append(pBdr)


def build_resume_docx(document: ResumeDocument) -> bytes:
    """
    Package the text layout as a DOCX file.

    Every non-empty line of the text layout becomes one paragraph, in order.
    Section labels are bold with a rule underneath.
    """
    header, sections = text_sections(document)

    doc = Document()
    for section in doc.sections:
        section.top_margin = Inches(0.75)
        section.bottom_margin = Inches(0.75)
        section.left_margin = Inches(0.75)
        section.right_margin = Inches(0.75)

    header_lines = header.split("\n") if header else []
    for index, line in enumerate(header_lines):
        p = doc.add_paragraph()
        run = p.add_run(line)
        run.font.name = 'Arial'
        if index == 0:
            run.bold = True
            run.font.size = Pt(18)
        else:
            run.font.size = Pt(9)
            run.font.color.rgb = RGBColor(51, 51, 51)

    for label, blocks in sections:
        p = doc.add_paragraph()
        run = p.add_run(label)
        run.bold = True
        run.font.size = Pt(11)
        run.font.name = 'Arial'
        p.paragraph_format.space_before = Pt(14)
        p.paragraph_format.space_after = Pt(6)
        _add_bottom_border(p)

        for block in blocks:
            for position, line in enumerate(block.split("\n")):
                p = doc.add_paragraph()
                run = p.add_run(line)
                run.font.size = Pt(10)
                run.font.name = 'Arial'
                if position == 0:
                    p.paragraph_format.space_before = Pt(8)

    buffer = BytesIO()
    doc.save(buffer)
    buffer.seek(0)
    return buffer.read()
