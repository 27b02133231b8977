"""Command-line entry point: static build, offline PDF export, serve.

    resume-site build --out dist [--pdf-url URL]
    resume-site pdf --out resume.pdf [--url URL]
    resume-site serve [--port N]

``build`` renders the page in static-export mode (no server-side PDF
endpoint; the PDF call-to-action links to --pdf-url / RESUME_PDF_URL).
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

import anyio
from dotenv import load_dotenv

from resume_site import config
from resume_site.content import ContentFetchError, ContentSource, create_content_source
from resume_site.export import ExportError, export_resume_pdf
from resume_site.render import STATIC_DIR, render_resume_page

logger = logging.getLogger("resume.cli")


async def build_static_site(
    out_dir: Path,
    pdf_url: str | None = None,
    source: ContentSource | None = None,
) -> Path:
    """Render index.html and copy the stylesheet into ``out_dir``."""
    source = source or create_content_source()
    data = await source.fetch()
    html = render_resume_page(data, static_export=True, pdf_url=pdf_url)

    out_dir.mkdir(parents=True, exist_ok=True)
    index = out_dir / "index.html"
    index.write_text(html, encoding="utf-8")
    shutil.copytree(STATIC_DIR, out_dir / "static", dirs_exist_ok=True)
    logger.info("Static résumé written to %s", index)
    return index


async def write_pdf(out_file: Path, url: str | None = None) -> int:
    """Export the running site to ``out_file``; returns the byte count."""
    result = await export_resume_pdf(url)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_bytes(result.content)
    logger.info("PDF written to %s (%d bytes)", out_file, result.size)
    return result.size


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-site",
        description="Render the résumé as a static page or export it as a PDF.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Render a static index.html")
    build.add_argument("--out", default="dist", help="Output directory (default: dist)")
    build.add_argument("--pdf-url", default=None,
                       help="PDF link shown on the page (default: $RESUME_PDF_URL)")

    pdf = sub.add_parser("pdf", help="Capture the running site as a PDF")
    pdf.add_argument("--out", default="resume.pdf", help="Output file (default: resume.pdf)")
    pdf.add_argument("--url", default=None,
                     help="Page to capture (default: derived from RESUME_PUBLIC_HOST / PORT)")

    serve = sub.add_parser("serve", help="Run the web server")
    serve.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3000)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = _parser().parse_args(argv)

    try:
        if args.command == "build":
            pdf_url = args.pdf_url or config.get_pdf_url()
            anyio.run(build_static_site, Path(args.out), pdf_url)
        elif args.command == "pdf":
            anyio.run(write_pdf, Path(args.out), args.url)
        else:
            from resume_site.main import run

            run(args.port)
    except ContentFetchError as exc:
        print(f"ERROR: could not fetch résumé content: {exc}", file=sys.stderr)
        return 1
    except ExportError as exc:
        print(f"ERROR: PDF export failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
