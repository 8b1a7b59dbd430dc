"""Management CLI commands."""

import json
import sys
from pathlib import Path

from flask import Flask
from pydantic import ValidationError

from resume_studio import create_app, db
from resume_studio.schemas.resume_document_schema import ResumeDocument
from resume_studio.schemas.resume_export_schema import ExportFormat
from resume_studio.services.export import ExportError, resume_export_service


def init_db(app: Flask) -> None:
    """Initialize the database."""
    with app.app_context():
        db.create_all()
        app.logger.info("Database initialized successfully")


def drop_db(app: Flask, confirm: bool = False) -> None:
    """Drop all database tables."""
    if not confirm:
        response = input("Are you sure you want to drop all tables? [y/N]: ")
        if response.lower() != "y":
            print("Operation cancelled")
            return

    with app.app_context():
        db.drop_all()
        app.logger.info("Database dropped successfully")


def show_config() -> None:
    """Print the loaded settings with secrets masked."""
    from config.settings import settings

    settings.display_config()


def load_document(path: str) -> ResumeDocument:
    """Read a ResumeDocument from a JSON file (camelCase, as the API takes it)."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Could not read {path}: {e}")
        sys.exit(1)

    # Accept both a bare document and a {"data": ...} request body
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]

    try:
        return ResumeDocument.model_validate(payload)
    except ValidationError as e:
        print(f"❌ {path} is not a resume document:\n{e}")
        sys.exit(1)


def render_document(path: str, template: str = "modern", output: str = None) -> None:
    """Render a JSON document to HTML under a template."""
    document = load_document(path)
    html = resume_export_service.get_preview_html(document, template)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        print(f"✅ Rendered {path} with '{template}' to {output}")
    else:
        print(html)


def export_document(path: str, export_format: str = "pdf", template: str = "modern", output_dir: str = ".") -> None:
    """Export a JSON document to pdf, docx or text."""
    try:
        format_enum = ExportFormat(export_format.lower())
    except ValueError:
        print(f"Invalid format: {export_format}. Use: pdf, docx, text")
        sys.exit(1)

    document = load_document(path)
    try:
        artifact = resume_export_service.export(document, format_enum, template)
    except ExportError as e:
        print(f"❌ {e.user_message} ({e})")
        sys.exit(1)

    target = Path(output_dir) / artifact.filename
    target.write_bytes(artifact.content)
    print(f"✅ Exported {path} to {target} ({len(artifact.content)} bytes)")


if __name__ == "__main__":
    app = create_app()

    def arg(index: int, default=None):
        return sys.argv[index] if len(sys.argv) > index else default

    commands = {
        "init": lambda: init_db(app),
        "drop": lambda: drop_db(app, confirm=arg(2) == "--yes"),
        "show-config": show_config,
        "render": lambda: render_document(arg(2), template=arg(3, "modern"), output=arg(4)),
        "export": lambda: export_document(
            arg(2),
            export_format=arg(3, "pdf"),
            template=arg(4, "modern"),
            output_dir=arg(5, "."),
        ),
    }

    if len(sys.argv) < 2:
        print("Usage: python manage.py <command>")
        print("\nCommands:")
        print("  init                - Create database tables")
        print("  drop                - Drop all tables")
        print("                        Usage: drop [--yes]")
        print("  show-config         - Print the loaded settings")
        print("\nResume Commands:")
        print("  render              - Render a JSON resume to HTML")
        print("                        Usage: render <file.json> [template] [output.html]")
        print("  export              - Export a JSON resume to a file")
        print("                        Usage: export <file.json> [pdf|docx|text] [template] [output_dir]")
        sys.exit(1)

    command = sys.argv[1]
    if command not in commands:
        print(f"Unknown command: {command}")
        sys.exit(1)

    if command in ("render", "export") and not arg(2):
        print(f"Usage: python manage.py {command} <file.json> ...")
        sys.exit(1)

    commands[command]()
